import os
from collections.abc import Callable, Mapping

from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response, StreamingResponse

from .. import pages
from .. import utils
from ..marketing import BentoCredentials, notify_download
from ..models import DownloadRequest
from ..settings import collect_passwords
from ..storage import BlobStore

NO_PASSWORDS_MESSAGE = "No passwords configured. Add DOWNLOAD_PASSWORD or DOWNLOAD_PASSWORD_1 to the environment."
WRONG_PASSWORD_MESSAGE = "Wrong password. Try again."
EMAIL_REQUIRED_MESSAGE = "Email address is required."
DEFAULT_CONTENT_TYPE = "application/octet-stream"
OVERRIDDEN_HEADERS = {"content-type", "content-disposition", "content-length"}

Scheduler = Callable[..., None]


async def parse_download_request(request: Request) -> DownloadRequest:
    # scope["path"] is already percent-decoded, so "#" and "?" stay part of the key
    """Build the request state from the URL, query string and (for POST) the form body."""
    download_request = DownloadRequest(
        path=request.scope["path"].lstrip("/"),
        download=request.query_params.get("download") == "1",
    )
    if request.method == "POST":
        form = await request.form()
        password = form.get("password")
        email = form.get("email")
        download_request.password = password if isinstance(password, str) else None
        download_request.email = email.strip() if isinstance(email, str) and email.strip() else None
    return download_request


async def handle_download(
    request: Request,
    env: Mapping[str, str],
    store: BlobStore,
    schedule: Scheduler,
) -> Response:
    """Serve one request to the download gate.

    ``GET /<path>`` shows the password form, ``POST /<path>`` checks the
    password and email and answers with a page that fetches
    ``/<path>?download=1``, which streams the file. Accepted submissions are
    reported to Bento through *schedule*, which must not wait for the call.
    """
    pathname = request.scope["path"]
    valid_passwords = collect_passwords(env)
    print(f"[Download] {request.method} {pathname} ({len(valid_passwords)} password(s) configured)")

    if not valid_passwords:
        print("[Download] No passwords configured in environment")
        return PlainTextResponse(NO_PASSWORDS_MESSAGE, status_code=500)

    state = await parse_download_request(request)

    if not state.path:
        return HTMLResponse(pages.INDEX_PAGE)

    if request.method == "POST":
        print(f"[Download] Form submitted (email provided: {'yes' if state.email else 'no'})")

        if not utils.is_valid_password(state.password, valid_passwords):
            print("[Download] Invalid password attempt")
            return HTMLResponse(pages.password_form(pathname, WRONG_PASSWORD_MESSAGE))

        if not state.email:
            print("[Download] Valid password but missing email")
            return HTMLResponse(pages.password_form(pathname, EMAIL_REQUIRED_MESSAGE))

        print(f"[Download] Valid credentials for email: {state.email}")
        credentials = BentoCredentials.from_env(env)
        if credentials:
            schedule(notify_download, credentials, state.email, state.path)
        else:
            print("[Bento] Missing BENTO_SITE_UUID, BENTO_PUBLISHABLE_KEY or BENTO_SECRET_KEY - skipping tracking")

        return HTMLResponse(pages.download_page(state.path))

    if state.download:
        blob = await store.get(state.path)
        if blob is None:
            print(f"[Download] File not found: {state.path}")
            return PlainTextResponse("File not found", status_code=404)

        filename = utils.filename_from_path(state.path)
        # Stored metadata first; the download headers always win
        headers = {
            name: value
            for name, value in blob.http_metadata.items()
            if name.lower() not in OVERRIDDEN_HEADERS
        }
        headers["Content-Disposition"] = utils.content_disposition(filename)
        if blob.size is not None:
            headers["Content-Length"] = str(blob.size)

        print(f"[Download] Serving file: {filename} ({blob.size} bytes)")
        return StreamingResponse(
            blob.body,
            headers=headers,
            media_type=blob.content_type or DEFAULT_CONTENT_TYPE,
        )

    return HTMLResponse(pages.password_form(pathname))


class DownloadRouter:
    def __init__(self, store: BlobStore, env: Mapping[str, str] | None = None):
        self.store = store
        # Passwords and Bento keys are re-read on every request
        self.env = env

        self.router = APIRouter(tags=["Download"])
        self.router.add_api_route("/{path:path}", self.download, methods=["GET", "POST"], response_model=None)

    async def download(self, request: Request, background_tasks: BackgroundTasks) -> Response:
        env = self.env if self.env is not None else os.environ
        return await handle_download(request, env, self.store, background_tasks.add_task)
