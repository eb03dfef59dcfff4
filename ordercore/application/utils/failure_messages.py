from __future__ import annotations

import asyncio

import httpx

from ordercore.domain.entities.order_submission import FailureCategory

_MESSAGES: dict[str, dict[FailureCategory, str]] = {
    "pt": {
        FailureCategory.network: "Não foi possível conectar ao servidor. Verifique sua internet e tente novamente.",
        FailureCategory.timeout: "O servidor demorou para responder. Tente novamente em alguns instantes.",
        FailureCategory.not_found: "Serviço de pedidos não encontrado. Tente novamente mais tarde.",
        FailureCategory.server: "Nosso sistema está passando por instabilidade. Tente novamente em alguns minutos.",
    },
    "en": {
        FailureCategory.network: "We couldn't reach our server. Check your connection and try again.",
        FailureCategory.timeout: "The server took too long to respond. Please try again shortly.",
        FailureCategory.not_found: "The order service could not be found. Please try again later.",
        FailureCategory.server: "Our system is having trouble right now. Please try again in a few minutes.",
    },
    "es": {
        FailureCategory.network: "No pudimos conectar con el servidor. Verifica tu conexión e inténtalo de nuevo.",
        FailureCategory.timeout: "El servidor tardó demasiado en responder. Inténtalo de nuevo en unos instantes.",
        FailureCategory.not_found: "No se encontró el servicio de pedidos. Inténtalo más tarde.",
        FailureCategory.server: "Nuestro sistema tiene problemas en este momento. Inténtalo en unos minutos.",
    },
}


def categorize_status(status_code: int) -> FailureCategory:
    if status_code == 404:
        return FailureCategory.not_found
    return FailureCategory.server


def categorize_exception(exc: BaseException) -> FailureCategory:
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return FailureCategory.timeout
    if isinstance(exc, httpx.HTTPStatusError):
        return categorize_status(exc.response.status_code)
    if isinstance(exc, (httpx.TransportError, OSError)):
        return FailureCategory.network
    return FailureCategory.server


def failure_message(category: FailureCategory, locale: str | None) -> str:
    language = (locale or "pt").split("-")[0].lower()
    return _MESSAGES.get(language, _MESSAGES["en"])[category]
