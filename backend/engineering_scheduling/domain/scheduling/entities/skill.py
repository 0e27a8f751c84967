"""Skill catalogue entry."""

from uuid import UUID, uuid4

from pydantic import Field

from ...shared.base import DomainRecord


class ResourceSkill(DomainRecord):
    """Catalogue entry for a skill tag that resources can carry."""

    id: UUID = Field(default_factory=uuid4)
    skill_code: str
    skill_name: str
    skill_category: str | None = None
    is_active: bool = True

    def is_well_formed(self) -> bool:
        """Code, name and category must all be present."""
        return bool(
            self.skill_code.strip()
            and self.skill_name.strip()
            and (self.skill_category or "").strip()
        )
