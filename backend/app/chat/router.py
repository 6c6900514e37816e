"""FastAPI router for the chat endpoint."""
from fastapi import APIRouter, Depends, Request

from app.generation import GenerationClient

from .dispatcher import MessageDispatcher
from .schemas import ChatRequest, ChatResponse

router = APIRouter(prefix="/api", tags=["chat"])


def get_generation_client(request: Request) -> GenerationClient:
    """The generation client created at startup and stored on app.state."""
    return request.app.state.generation_client


def get_dispatcher(
    client: GenerationClient = Depends(get_generation_client),
) -> MessageDispatcher:
    return MessageDispatcher(client)


@router.post("/chat", response_model=ChatResponse)
async def chat(
    req: ChatRequest,
    dispatcher: MessageDispatcher = Depends(get_dispatcher),
) -> ChatResponse:
    """Generate a reply for a text, voice or video message.

    Returns:
        ChatResponse with the generated text. Generation failures still
        return 200 with a channel-specific apology.

    Raises:
        InvalidMessageTypeError: 400 for an unknown ``type``.
    """
    reply = await dispatcher.dispatch(req.message, req.type)
    return ChatResponse(response=reply)
