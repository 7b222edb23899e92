"""
Line-oriented JSON server over standard streams.

Each input line is one request object; each request produces exactly one
response line.  Requests are handled one at a time, in order::

    {"id": 1, "operation": "search_by_tsn", "arguments": {"tsn": "180092"}}
    {"id": 2, "prompt": "complete_taxonomy_profile", "arguments": {...}}
    {"id": 3, "list": "operations"}        # or "prompts"

Responses echo ``id`` and carry the dispatcher payload under ``result``.
Stdout is reserved for responses; logs go to stderr.
"""

from __future__ import annotations

import json
import logging
from typing import IO, Any

from itis_explorer import prompts
from itis_explorer.dispatch import OPERATIONS, OperationDispatcher
from itis_explorer.errors import ItisError

logger = logging.getLogger(__name__)


class ProtocolError(ItisError):
    """A request line is not a valid request object."""


def list_operations() -> list[dict[str, Any]]:
    return [
        {"name": op.name, "description": op.description, "required": op.required}
        for op in OPERATIONS.values()
    ]


def handle_request(dispatcher: OperationDispatcher, request: Any) -> dict[str, Any]:
    """Route one decoded request object; always returns a result payload."""
    if not isinstance(request, dict):
        return _protocol_error("request must be a JSON object")

    arguments = request.get("arguments") or {}
    if not isinstance(arguments, dict):
        return _protocol_error("'arguments' must be an object")

    if "operation" in request:
        return dispatcher.dispatch(str(request["operation"]), arguments)

    if "prompt" in request:
        try:
            return {"is_error": False, **prompts.get_prompt(str(request["prompt"]), arguments)}
        except ItisError as exc:
            return {"is_error": True, "error": exc.to_dict()}

    listing = request.get("list")
    if listing == "operations":
        return {"is_error": False, "operations": list_operations()}
    if listing == "prompts":
        return {"is_error": False, "prompts": prompts.list_prompts()}

    return _protocol_error("expected one of 'operation', 'prompt' or 'list'")


def serve(dispatcher: OperationDispatcher, stdin: IO[str], stdout: IO[str]) -> int:
    """Serve requests until EOF. Returns the number of requests handled."""
    handled = 0
    for raw in stdin:
        line = raw.strip()
        if not line:
            continue

        request_id = None
        try:
            request = json.loads(line)
        except json.JSONDecodeError as exc:
            result = _protocol_error(f"invalid JSON: {exc.msg}")
        else:
            if isinstance(request, dict):
                request_id = request.get("id")
            try:
                result = handle_request(dispatcher, request)
            except Exception:
                # Keep serving after a handler bug; the traceback goes to the log.
                logger.exception("Unhandled error for request %r", request_id)
                result = {
                    "is_error": True,
                    "error": {"type": "InternalError", "message": "unexpected server error"},
                }

        stdout.write(json.dumps({"id": request_id, "result": result}, default=str) + "\n")
        stdout.flush()
        handled += 1
    logger.info("Input closed after %d request(s)", handled)
    return handled


def _protocol_error(message: str) -> dict[str, Any]:
    return {"is_error": True, "error": ProtocolError(message).to_dict()}
