from typing import Optional

from fastapi import Header

from app.core.config import settings


def parse_accept_language(header_value: Optional[str]) -> str:
    """
    Pick the first supported language from an Accept-Language header.
    "id-ID,id;q=0.9,en;q=0.8" -> "id"
    """
    if not header_value:
        return settings.DEFAULT_LOCALE

    candidates = []
    for position, part in enumerate(header_value.split(",")):
        piece = part.strip()
        if not piece:
            continue
        tag, _, params = piece.partition(";")
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        language = tag.strip().split("-")[0].lower()
        candidates.append((-quality, position, language))

    for _, _, language in sorted(candidates):
        if language in settings.SUPPORTED_LOCALES:
            return language
    return settings.DEFAULT_LOCALE


def get_locale(accept_language: Optional[str] = Header(default=None)) -> str:
    return parse_accept_language(accept_language)
