from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_chat_store, get_reply_service
from ..errors import InvalidArgument
from ..services.chat_store import ChatContextStore
from ..services.reply import ConversationalReplyService

router = APIRouter(prefix="/chat", tags=["chat"])


class ChatRequest(BaseModel):
	message: Optional[str] = None
	conversation_id: Optional[str] = Field(default=None, alias="conversationId")


class ChatResponse(BaseModel):
	reply: str


@router.post("", response_model=ChatResponse)
async def chat(req: ChatRequest, service: ConversationalReplyService = Depends(get_reply_service)):
	message = (req.message or "").strip()
	if not message:
		raise InvalidArgument("message is required")
	reply = await service.reply(req.conversation_id, message)
	return ChatResponse(reply=reply)


@router.delete("/{conversation_id}")
async def clear_history(conversation_id: str, store: ChatContextStore = Depends(get_chat_store)):
	await store.clear(conversation_id)
	return {"cleared": True}
