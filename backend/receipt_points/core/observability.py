"""Observability helpers (Sentry init & common scrubbing).

Keeps initialisation a no-op when no DSN is configured so local runs
and tests never talk to Sentry.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from receipt_points.core.config import settings


def _before_send(event: Dict[str, Any], hint: Dict[str, Any] | None = None):
	"""Scrub obvious PII / secrets before sending to Sentry.

	- Drop Authorization & Cookie headers
	- Remove request data/body (keep method + URL)
	"""
	req = event.get("request") or {}
	headers = req.get("headers") or {}
	for k in list(headers.keys()):
		if k.lower() in ("authorization", "cookie", "set-cookie", "x-api-key"):
			headers.pop(k, None)
	# Receipts are user data; never ship raw bodies
	req.pop("data", None)
	event["request"] = req
	return event


def init_sentry(service: str) -> bool:
	"""Initialise Sentry once for a given process.

	Returns True if Sentry was initialised; False otherwise.
	"""
	if not settings.SENTRY_DSN:
		return False
	if getattr(init_sentry, "_done", False):  # prevent duplicate init in same process
		return True
	sentry_sdk.init(
		dsn=settings.SENTRY_DSN,
		integrations=[FastApiIntegration()],
		traces_sample_rate=float(settings.SENTRY_TRACES_SAMPLE_RATE or 0),
		environment=settings.ENVIRONMENT,
		release=settings.SENTRY_RELEASE,
		before_send=_before_send,
	)
	sentry_sdk.set_tag("service", service)
	init_sentry._done = True  # type: ignore[attr-defined]
	return True


def sentry_breadcrumb(category: str, message: str, level: str = "info", data: Optional[Dict[str, Any]] = None) -> None:
	"""Add a breadcrumb for important lifecycle steps (no-op without a DSN)."""
	if not settings.SENTRY_DSN:
		return
	sentry_sdk.add_breadcrumb(
		category=category,
		message=message,
		level=level,
		data=data or {},
	)


def sentry_capture(exc: BaseException) -> None:
	"""Report an unhandled exception when Sentry is configured."""
	if not settings.SENTRY_DSN:
		return
	sentry_sdk.capture_exception(exc)


__all__ = ["init_sentry", "sentry_breadcrumb", "sentry_capture"]
