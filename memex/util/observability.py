"""Logfire setup and instrumentation.

Services emit spans named `<service>.<operation>` (e.g. `vote_service.vote`)
and events carrying the ids involved:

    with logfire.span("vote_service.vote", subject_id=post_id):
        logfire.info("Vote recorded", new_score=score)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from memex.config import ObservabilitySettings, Settings

# Attribute names that may carry credentials in MemeX payloads
SCRUB_PATTERNS = ["id_token", "api_secret", "signature"]


def should_send(observability: ObservabilitySettings) -> bool:
    """Explicit `send_to_logfire` wins; otherwise send only when a token is set."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is imported.

    The test environment keeps the console quiet; other environments print
    spans with their parents so a vote's batch shows under its request.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send(settings.observability)
    console = (
        False
        if settings.environment == "test"
        else logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        )
    )

    logfire.configure(
        service_name="memex-api",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=console,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
    )

    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        version=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    mapped = {**attributes, "method": request.method, "path": request.url.path}
    if request.client:
        mapped["client_host"] = request.client.host
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request; headers stay out since they hold ID tokens."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL, including the SAVEPOINT around each batch."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace calls to the Firebase cert endpoint and Cloudinary."""
    logfire.instrument_httpx()
