"""Jerarquía de errores de una consulta de cotizaciones."""

from __future__ import annotations
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    HTTP = "http"
    MALFORMED = "malformed"


class QueryError(RuntimeError):
    """Base: cualquier fallo que termina la consulta actual (nunca el proceso)."""
    kind: ErrorKind = ErrorKind.NETWORK


class ValidationError(QueryError):
    """Entrada del llamador inválida; no llega a la red."""
    kind = ErrorKind.VALIDATION


class NetworkError(QueryError):
    """Fallo de transporte o cuerpo que no es JSON."""
    kind = ErrorKind.NETWORK


class HttpError(QueryError):
    """Status no 2xx; el cuerpo no se interpreta."""
    kind = ErrorKind.HTTP

    def __init__(self, status: int):
        super().__init__(f"Error {status}")
        self.status = status


class MalformedResponse(QueryError):
    """JSON válido pero con una forma inesperada."""
    kind = ErrorKind.MALFORMED
