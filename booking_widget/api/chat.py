from fastapi import APIRouter, Depends

from booking_widget.api.schemas import ChatRequestSchema, ChatResponseSchema, ReplySchema
from booking_widget.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from booking_widget.domain.entities.message import ChatMessage
from booking_widget.wiring.dependencies import get_handle_chat_message_use_case

router = APIRouter()


@router.post("/chat", response_model=ChatResponseSchema)
def chat(
    req: ChatRequestSchema,
    uc: HandleChatMessageUseCase = Depends(get_handle_chat_message_use_case),
):
    response = uc.handle(
        ChatMessage(
            business_slug=req.business_slug or "",
            text=req.message or "",
            session_id=req.session_id,
            kb_payload=req.kb.model_dump(mode="json", exclude_none=True) if req.kb else None,
        )
    )
    return ChatResponseSchema(session_id=response.session_id, reply=ReplySchema(text=response.reply.text))
