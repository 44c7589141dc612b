from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, status
from pydantic import BaseModel, Field

from zameny import __version__, config
from zameny.errors import DistributionMismatchError, ExtractionError, FetchError
from zameny.services.replacements import ReplacementsResult, ReplacementsService


LOGGER = logging.getLogger(__name__)


class ParseRequest(BaseModel):
    text: str = Field(description="Текст бюллетеня замен, извлечённый из документа.")
    strict: Optional[bool] = Field(
        default=None,
        description="Ошибка при несовпадении числа групп и замен в блоке.",
    )


class MismatchPayload(BaseModel):
    groups: List[str]
    replacements: List[str]
    unassigned_groups: List[str]
    dropped_replacements: List[str]


class ReplacementsResponse(BaseModel):
    source: Optional[str]
    groups: Dict[str, List[str]]
    mismatches: List[MismatchPayload]


app = FastAPI(
    title="Замены VGPGK API",
    description="Разбор бюллетеня замен по группам",
    version=__version__,
)


def get_replacements_service() -> ReplacementsService:
    return ReplacementsService()


ServiceDep = Annotated[ReplacementsService, Depends(get_replacements_service)]


def _to_response(result: ReplacementsResult) -> Dict[str, Any]:
    return result.to_dict()


def _mismatch_exception(exc: DistributionMismatchError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Число групп и замен не совпадает ({exc.mismatch.describe()})",
    )


@app.get("/")
def index() -> Dict[str, str]:
    return {
        "message": "Замены VGPGK API",
        "replacements_url": config.replacements_url(),
        "schedule_url": config.schedule_url(),
    }


@app.get("/replacements", response_model=ReplacementsResponse)
def get_replacements(
    service: ServiceDep,
    url: Annotated[Optional[str], Query(min_length=1)] = None,
    strict: Optional[bool] = None,
):
    try:
        result = service.fetch_replacements(url, strict=strict)
    except FetchError as exc:
        LOGGER.warning("Не удалось скачать файл замен: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Не удалось скачать файл замен: {exc.url}",
        ) from exc
    except ExtractionError as exc:
        LOGGER.warning("Не удалось прочитать файл замен: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Не удалось прочитать файл замен: {exc}",
        ) from exc
    except DistributionMismatchError as exc:
        raise _mismatch_exception(exc) from exc
    return _to_response(result)


@app.post("/replacements/parse", response_model=ReplacementsResponse)
def parse_replacements(payload: ParseRequest, service: ServiceDep):
    if not payload.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Отсутствует текст замен",
        )
    try:
        result = service.parse_text(payload.text, strict=payload.strict)
    except DistributionMismatchError as exc:
        raise _mismatch_exception(exc) from exc
    return _to_response(result)
