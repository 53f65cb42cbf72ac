from fastapi import APIRouter, Depends, Header

from booking_widget.api.schemas import BusinessPublicSchema, BusinessUpsertSchema
from booking_widget.application.use_cases.manage_business import ManageBusinessUseCase
from booking_widget.wiring.dependencies import get_manage_business_use_case

router = APIRouter()


@router.get("/businesses/{slug}", response_model=BusinessPublicSchema)
def get_business(
    slug: str,
    uc: ManageBusinessUseCase = Depends(get_manage_business_use_case),
):
    return BusinessPublicSchema(**uc.get_public(slug.strip().lower()))


@router.put("/admin/businesses/{slug}", response_model=BusinessPublicSchema)
def upsert_business(
    slug: str,
    req: BusinessUpsertSchema,
    x_admin_token: str | None = Header(None),
    uc: ManageBusinessUseCase = Depends(get_manage_business_use_case),
):
    record = uc.upsert(slug, req.model_dump(mode="json"), x_admin_token)
    return BusinessPublicSchema(**uc.get_public(record.slug))
