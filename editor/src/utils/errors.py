"""Exception types raised by the canvas core and its adapters."""

import json
import re

from constants import MSG_UNEXPECTED_ERROR


class CanvasError(Exception):
	"""Base class for canvas editor errors"""


class DecodeFailure(CanvasError):
	"""A supplied image could not be decoded"""


class GenerationFailure(CanvasError):
	"""The generation adapter reported or raised an error"""


class InvalidRevertIndex(CanvasError, IndexError):
	"""A history index outside [0, length-1] was requested"""


_ERROR_PAYLOAD = re.compile(r'{"error":\s*(.*)}')


def extract_error_message(error_text, fallback=MSG_UNEXPECTED_ERROR):
	"""Best-effort extraction of a readable message from an adapter error.
	
	Service errors often embed a JSON payload such as
	'400 Bad Request {"error": {"message": "..."}}'. The payload's message
	is returned when it parses; otherwise the raw text, then the fallback.
	
	Args:
		error_text: Error string (or exception) reported by the adapter
		fallback: Message used when nothing readable is available
		
	Returns:
		str: Message suitable for a user-facing notification
	"""
	text = str(error_text or '').strip()
	if not text:
		return fallback
	match = _ERROR_PAYLOAD.search(text)
	if match:
		try:
			payload = json.loads(match.group(1))
		except ValueError:
			return text
		if isinstance(payload, dict) and payload.get('message'):
			return payload['message']
	return text
