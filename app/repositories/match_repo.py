# app/repositories/match_repo.py
# 媒合紀錄的儲存：以 (project_id, freelancer_id) 為鍵的 upsert
import logging
import uuid
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.match import Match

logger = logging.getLogger(__name__)


def clamp_score(score: float) -> int:
    """分數限制在 0 ~ 100 並取整數"""
    return int(round(min(100.0, max(0.0, float(score)))))


class MatchRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_match(self, project_id: str, freelancer_id: str) -> Optional[Match]:
        stmt = select(Match).where(
            Match.project_id == project_id,
            Match.freelancer_id == freelancer_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def upsert_match(self, project_id: str, freelancer_id: str, score: float, reason: str) -> Match:
        """
        寫入 (或覆蓋) 一筆媒合紀錄。

        同一組 (project_id, freelancer_id) 只會有一筆：已存在就更新分數與理由，
        否則新增。兩個請求同時新增時，輸掉唯一鍵競爭的一方改為更新 (後寫入者為準)。
        此方法從不刪除紀錄。
        """
        match_score = clamp_score(score)

        match = await self.get_match(project_id, freelancer_id)
        if match is None:
            match = Match(
                id=str(uuid.uuid4()),
                project_id=project_id,
                freelancer_id=freelancer_id,
                match_score=match_score,
                match_reason=reason
            )
            self.db.add(match)
            try:
                await self.db.commit()
                return match
            except IntegrityError:
                await self.db.rollback()
                logger.info(f"Concurrent insert for match ({project_id}, {freelancer_id}); updating instead")
                match = await self.get_match(project_id, freelancer_id)
                if match is None:
                    raise

        match.match_score = match_score
        match.match_reason = reason
        await self.db.commit()
        return match

    async def list_matches_for_freelancer(self, freelancer_id: str, limit: int = 10) -> List[Match]:
        """
        工作者的媒合結果，分數由高到低 (project 由 lazy="selectin" 一併載入)
        """
        stmt = (
            select(Match)
            .where(Match.freelancer_id == freelancer_id)
            .order_by(Match.match_score.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def count_matches_for_freelancer(self, freelancer_id: str) -> int:
        stmt = select(func.count(Match.id)).where(Match.freelancer_id == freelancer_id)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def list_matches_for_project(self, project_id: str) -> List[Match]:
        stmt = (
            select(Match)
            .where(Match.project_id == project_id)
            .order_by(Match.match_score.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()
