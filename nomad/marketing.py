"""
Bento marketing API client.

Successful gated downloads are reported to Bento as ``$direct_download``
events. Reporting is best-effort: ``notify_download`` never raises and is
meant to run as a background task after the response has been sent.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from .models import BentoBatch, BentoEvent

BENTO_EVENTS_URL = "https://app.bentonow.com/api/v1/batch/events"
USER_AGENT = "Nomad-Magazine-Download/1.0"
TIMEOUT = 10.0


@dataclass(frozen=True)
class BentoCredentials:
    site_uuid: str
    publishable_key: str
    secret_key: str

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "BentoCredentials | None":
        site_uuid = env.get("BENTO_SITE_UUID")
        publishable_key = env.get("BENTO_PUBLISHABLE_KEY")
        secret_key = env.get("BENTO_SECRET_KEY")
        if not site_uuid or not publishable_key or not secret_key:
            return None
        return cls(site_uuid=site_uuid, publishable_key=publishable_key, secret_key=secret_key)


def build_download_event(site_uuid: str, email: str, path: str) -> BentoBatch:
    return BentoBatch(
        site_uuid=site_uuid,
        events=[BentoEvent(email=email, details={"file_path": path})],
    )


async def notify_download(
    credentials: BentoCredentials,
    email: str,
    path: str,
    client: httpx.AsyncClient | None = None,
) -> None:
    """Send a ``$direct_download`` event for *email* and *path* to Bento.

    Errors are printed and swallowed. When *client* is given it is used as-is
    and left open.
    """
    payload = build_download_event(credentials.site_uuid, email, path)

    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=TIMEOUT)
        close_client = True

    try:
        print("[Bento] Submitting download event")
        response = await client.post(
            BENTO_EVENTS_URL,
            json=payload.model_dump(),
            auth=httpx.BasicAuth(credentials.publishable_key, credentials.secret_key),
            headers={"User-Agent": USER_AGENT},
        )
        print(f"[Bento] API response status: {response.status_code}")

        if not response.is_success:
            print(f"[Bento] API error (status {response.status_code}): {response.text}")
            return

        try:
            print(f"[Bento] Event submitted: {json.dumps(response.json())}")
        except ValueError:
            print(f"[Bento] Event submitted: {response.text}")
    except Exception as e:
        print(f"[Bento] API request failed: {e!r}")
    finally:
        if close_client:
            await client.aclose()
