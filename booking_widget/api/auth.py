from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from booking_widget.api.schemas import SendLinkRequestSchema, SendLinkResponseSchema
from booking_widget.application.use_cases.magic_link import MagicLinkUseCase
from booking_widget.wiring.dependencies import get_magic_link_use_case

router = APIRouter(prefix="/auth")


@router.post("/send-link", response_model=SendLinkResponseSchema)
def send_link(
    req: SendLinkRequestSchema,
    uc: MagicLinkUseCase = Depends(get_magic_link_use_case),
):
    result = uc.send_link(req.email, req.slug)
    return SendLinkResponseSchema(
        sent=result.sent,
        verify_url=None if result.sent else result.verify_url,
    )


@router.get("/verify")
def verify(
    email: str | None = Query(None),
    slug: str | None = Query(None),
    uc: MagicLinkUseCase = Depends(get_magic_link_use_case),
):
    redirect_url = uc.verify(email, slug)
    if redirect_url:
        return RedirectResponse(redirect_url, status_code=302)
    return HTMLResponse(
        "<!doctype html><html><body>"
        "<h1>Connexion confirmée</h1>"
        "<p>Le tableau de bord n'est pas encore disponible.</p>"
        "</body></html>"
    )
