# app/billing/billing_service.py
import logging
from typing import Dict, List, Mapping, Optional

from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.appconfig import settings
from app.helpers.exceptions import DuplicatePayerError
from app.system_models.billing_model.billing_model import CustomPayer, FeeSchedule, PracticeInfo

logger = logging.getLogger(__name__)

DEFAULT_FEE_SCHEDULE: Dict[str, float] = {
    "90832": 95,
    "90834": 130,
    "90837": 175,
    "90847": 150,
    "90853": 50,
}


def charge_for_cpt(schedule: Mapping[str, float], cpt_code: Optional[str]) -> Optional[float]:
    """Charge for a CPT code, or None when the schedule does not price it."""
    if not cpt_code:
        return None
    amount = schedule.get(cpt_code)
    return float(amount) if amount is not None else None


# ============================================================
# ✅ FEE SCHEDULE
# ============================================================
async def get_fee_schedule(db: AsyncSession, location_id: str) -> tuple[Dict[str, float], bool]:
    """The location's schedule and whether the default was used."""
    result = await db.execute(select(FeeSchedule).where(FeeSchedule.location_id == location_id))
    schedule = result.scalars().first()
    if schedule is None:
        return dict(DEFAULT_FEE_SCHEDULE), True
    return dict(schedule.fees or {}), False


async def save_fee_schedule(
    db: AsyncSession, location_id: str, fees: Mapping[str, float], updated_by: Optional[str] = None
) -> Dict[str, float]:
    result = await db.execute(select(FeeSchedule).where(FeeSchedule.location_id == location_id))
    schedule = result.scalars().first()
    if schedule is None:
        schedule = FeeSchedule(location_id=location_id)
        db.add(schedule)
    schedule.fees = dict(fees)
    schedule.updated_by = updated_by
    await db.commit()
    logger.info(f"Fee schedule updated for location {location_id} ({len(fees)} codes)")
    return dict(schedule.fees)


# ============================================================
# ✅ CUSTOM PAYERS
# ============================================================
async def list_custom_payers(db: AsyncSession, location_id: str) -> List[CustomPayer]:
    result = await db.execute(
        select(CustomPayer).where(CustomPayer.location_id == location_id).order_by(CustomPayer.id)
    )
    return result.scalars().all()


async def add_custom_payer(db: AsyncSession, location_id: str, payer_id: str, name: str) -> CustomPayer:
    result = await db.execute(
        select(CustomPayer).where(
            CustomPayer.location_id == location_id,
            CustomPayer.payer_id == payer_id,
        )
    )
    if result.scalars().first():
        raise DuplicatePayerError(payer_id)

    payer = CustomPayer(location_id=location_id, payer_id=payer_id, name=name)
    db.add(payer)
    await db.commit()
    await db.refresh(payer)
    return payer


async def delete_custom_payer(db: AsyncSession, location_id: str, payer_id: str) -> None:
    """Removing a payer that is not on the list is a no-op."""
    result = await db.execute(
        select(CustomPayer).where(
            CustomPayer.location_id == location_id,
            CustomPayer.payer_id == payer_id,
        )
    )
    payer = result.scalars().first()
    if payer:
        await db.delete(payer)
        await db.commit()


# ============================================================
# ✅ PRACTICE INFO
# ============================================================
def default_practice_info(location_id: str) -> PracticeInfo:
    return PracticeInfo(
        location_id=location_id,
        name=settings.PRACTICE_NAME,
        address=settings.PRACTICE_ADDRESS or None,
        phone=settings.PRACTICE_PHONE or None,
    )


async def get_practice_info(db: AsyncSession, location_id: str) -> PracticeInfo:
    result = await db.execute(select(PracticeInfo).where(PracticeInfo.location_id == location_id))
    return result.scalars().first() or default_practice_info(location_id)


async def save_practice_info(db: AsyncSession, location_id: str, data: dict) -> PracticeInfo:
    result = await db.execute(select(PracticeInfo).where(PracticeInfo.location_id == location_id))
    info = result.scalars().first()
    if info is None:
        info = PracticeInfo(location_id=location_id)
        db.add(info)
    for key, value in data.items():
        setattr(info, key, value)
    await db.commit()
    await db.refresh(info)
    return info
