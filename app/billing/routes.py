# app/billing/routes.py
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.audit.audit_service import audit_event_for, record_audit_event
from app.billing.billing_service import (
    add_custom_payer,
    charge_for_cpt,
    delete_custom_payer,
    get_fee_schedule,
    get_practice_info,
    list_custom_payers,
    save_fee_schedule,
    save_practice_info,
)
from app.database.connection import get_db
from app.helpers.exceptions import ChartError, to_http_exception
from app.reference.cpt_codes import describe_cpt
from app.system_models.billing_model.billing_schemas import (
    ChargeResponse,
    CustomPayerCreate,
    CustomPayerListResponse,
    CustomPayerResponse,
    FeeScheduleResponse,
    FeeScheduleUpdate,
    PracticeInfoResponse,
    PracticeInfoUpdate,
)
from app.system_models.progress_note_model.progress_note_schemas import MessageResponse
from app.users.auth_dependencies import RequestContext, get_admin_context, get_request_context

router = APIRouter()


# ===== ✅ FEE SCHEDULE =====
@router.get("/fee-schedule", response_model=FeeScheduleResponse)
async def get_fee_schedule_endpoint(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        fees, is_default = await get_fee_schedule(db, ctx.location_id)
        return FeeScheduleResponse(location_id=ctx.location_id, fee_schedule=fees, is_default=is_default)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/fee-schedule", response_model=FeeScheduleResponse)
async def save_fee_schedule_endpoint(
    payload: FeeScheduleUpdate,
    background_tasks: BackgroundTasks,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        fees = await save_fee_schedule(db, ctx.location_id, payload.fee_schedule, updated_by=ctx.user.full_name)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    background_tasks.add_task(
        record_audit_event,
        **audit_event_for(
            ctx, "UPDATE", "fee_schedule",
            resource_id=ctx.location_id,
            description=f"Updated fee schedule ({len(fees)} codes)",
        ),
    )
    return FeeScheduleResponse(location_id=ctx.location_id, fee_schedule=fees, is_default=False)


@router.get("/fee-schedule/charge", response_model=ChargeResponse)
async def charge_endpoint(
    cpt_code: str = Query(..., alias="cptCode"),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    fees, _ = await get_fee_schedule(db, ctx.location_id)
    return ChargeResponse(cpt_code=cpt_code, description=describe_cpt(cpt_code), amount=charge_for_cpt(fees, cpt_code))


# ===== ✅ CUSTOM PAYERS =====
@router.get("/custom-payers", response_model=CustomPayerListResponse)
async def list_custom_payers_endpoint(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    payers = await list_custom_payers(db, ctx.location_id)
    return CustomPayerListResponse(payers=[CustomPayerResponse(id=p.payer_id, name=p.name) for p in payers])


@router.post("/custom-payers", response_model=CustomPayerResponse)
async def add_custom_payer_endpoint(
    payload: CustomPayerCreate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        payer = await add_custom_payer(db, ctx.location_id, payload.id, payload.name)
        return CustomPayerResponse(id=payer.payer_id, name=payer.name)
    except ChartError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/custom-payers/{payer_id}", response_model=MessageResponse)
async def delete_custom_payer_endpoint(
    payer_id: str,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    await delete_custom_payer(db, ctx.location_id, payer_id)
    return MessageResponse(message="Payer deleted")


# ===== ✅ PRACTICE INFO =====
@router.get("/practice-info", response_model=PracticeInfoResponse)
async def get_practice_info_endpoint(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    return await get_practice_info(db, ctx.location_id)


@router.put("/practice-info", response_model=PracticeInfoResponse)
async def save_practice_info_endpoint(
    payload: PracticeInfoUpdate,
    ctx: RequestContext = Depends(get_admin_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await save_practice_info(db, ctx.location_id, payload.model_dump())
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
