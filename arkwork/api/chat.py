# Role: Thin HTTP adapter for the chat namespace. Reads the raw body, runs the validator, and delegates
# the turn to ChatService; every ServiceError becomes its JSON body with the matching status code.

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from arkwork.api.deps import get_chat_service, read_json_body
from arkwork.core.chat_service import ChatService
from arkwork.core.errors import ServiceError, bad_request
from arkwork.core.validator import Validator
from arkwork.models.chat import ChatAnswer, ChatHealth, ChatRequest

router = APIRouter(prefix="/api/chat", tags=["chat"])

_validator = Validator(ChatRequest)


@router.get("", response_model=ChatHealth)
def chat_health(service: ChatService = Depends(get_chat_service)) -> ChatHealth:
    return ChatHealth(ok=True, model=service.model_name, hasKey=service.has_key)


@router.post("", response_model=ChatAnswer)
async def chat(request: Request, service: ChatService = Depends(get_chat_service)):
    # 1) Credential check first (cheapest, and no provider means nothing else matters)
    # 2) Validate the body into a ChatRequest
    # 3) Run the turn off the event loop (the Gemini SDK call is blocking)
    try:
        service.ensure_available()
        result = _validator.validate(await read_json_body(request))
        if not result.ok:
            raise bad_request(result.problems)
        answer = await run_in_threadpool(service.answer, result.request)
    except ServiceError as exc:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    return ChatAnswer(answer=answer)
