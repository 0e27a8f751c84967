"""Repository for the skill catalogue."""

from sqlmodel import select

from ....domain.scheduling.entities import ResourceSkill
from ..mappers import SkillMapper
from ..models import ResourceSkillTable
from .base import BaseRepository


class SkillRepository(BaseRepository[ResourceSkillTable, ResourceSkill]):
    model = ResourceSkillTable
    to_domain = staticmethod(SkillMapper.sql_to_domain)
    to_row = staticmethod(SkillMapper.domain_to_sql)

    def list_skills(self, active_only: bool = True) -> list[ResourceSkill]:
        statement = select(ResourceSkillTable)
        if active_only:
            statement = statement.where(ResourceSkillTable.is_active == True)  # noqa: E712
        return self._list(
            statement.order_by(ResourceSkillTable.skill_category, ResourceSkillTable.skill_code)
        )
