from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SectionSpec:
    key: str
    label: str


ADMIN_SECTIONS: tuple[SectionSpec, ...] = (
    SectionSpec("notification", "Notification"),
    SectionSpec("product", "Product"),
    SectionSpec("category", "Category"),
    SectionSpec("employees", "Employees"),
    SectionSpec("customer_report", "Customer Report"),
)

DEFAULT_SECTION = "notification"


def find_section(key: str) -> SectionSpec | None:
    for section in ADMIN_SECTIONS:
        if section.key == key:
            return section
    return None
