import uuid

from fastapi import APIRouter, Depends, HTTPException

from fundiconnect.api.v1.schemas import (
    ChatActionRequestSchema,
    ChatRequestSchema,
    ChatResponseSchema,
    FollowUpResponseSchema,
)
from fundiconnect.application.use_cases.process_message import ConversationPipeline
from fundiconnect.infrastructure.web.formatter import WebChatFormatter
from fundiconnect.wiring.dependencies import get_pipeline, get_web_formatter

router = APIRouter()


def _user_id(session_id: str) -> str:
    return f"web:{session_id}"


@router.post("/chat", response_model=ChatResponseSchema)
def chat(
    req: ChatRequestSchema,
    pipeline: ConversationPipeline = Depends(get_pipeline),
    formatter: WebChatFormatter = Depends(get_web_formatter),
):
    session_id = req.session_id or uuid.uuid4().hex
    replies = pipeline.process(req.message, _user_id(session_id), req.user_name)
    return ChatResponseSchema(session_id=session_id, messages=formatter.render_all(replies))


@router.post("/chat/action", response_model=ChatResponseSchema)
def chat_action(
    req: ChatActionRequestSchema,
    pipeline: ConversationPipeline = Depends(get_pipeline),
    formatter: WebChatFormatter = Depends(get_web_formatter),
):
    replies = pipeline.handle_action(req.action, _user_id(req.session_id), req.user_name)
    return ChatResponseSchema(session_id=req.session_id, messages=formatter.render_all(replies))


@router.get("/chat/{session_id}/follow-up", response_model=FollowUpResponseSchema)
def chat_follow_up(
    session_id: str,
    pipeline: ConversationPipeline = Depends(get_pipeline),
    formatter: WebChatFormatter = Depends(get_web_formatter),
):
    reply = pipeline.follow_up(_user_id(session_id))
    if reply is None:
        raise HTTPException(status_code=404, detail="No service request found for this session.")
    return FollowUpResponseSchema(session_id=session_id, message=formatter.render(reply))
