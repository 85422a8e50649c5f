"""HTML pages served by the download gate."""

from html import escape
from urllib.parse import quote

from . import utils

LOGO_URL = "https://nomad-magazine.com/logo.svg"

INDEX_PAGE = "<html><body><h3>Protected magazine downloads</h3><p>Specify a file in the URL.</p></body></html>"

_FORM_TEMPLATE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Password required</title>
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <style>
    body {{ font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif; background:#f5f5f5; display:flex; align-items:center; justify-content:center; min-height:100vh; padding:1rem; }}
    .box {{ background:white; padding:2rem 1.75rem; border-radius:0.75rem; box-shadow:0 10px 30px rgba(0,0,0,.06); width: min(400px, 100% - 2rem); }}
    .logo {{ max-width:150px; height:auto; margin:0 auto 1.5rem; display:block; }}
    h1 {{ font-size:1.3rem; margin-bottom:.5rem; text-align:center; color:#333; }}
    p.msg {{ color:#b00020; margin-bottom:.75rem; text-align:center; }}
    label {{ display:block; font-size:.85rem; margin-bottom:.35rem; margin-top:.75rem; font-weight:500; }}
    input[type=password], input[type=email] {{ width:100%; padding:.6rem .75rem; border:1px solid #ddd; border-radius:.5rem; font-size:.95rem; box-sizing:border-box; }}
    button {{ margin-top:1rem; width:100%; background:#FFC72C; color:#222; border:none; padding:.65rem; border-radius:.5rem; font-weight:600; cursor:pointer; font-size:.95rem; }}
    small {{ display:block; margin-top:1rem; color:#888; font-size:.75rem; text-align:center; line-height:1.4; }}
  </style>
</head>
<body>
  <form class="box" method="POST" action="{action}">
    <img src="{logo}" alt="Nomad Magazine" class="logo" onerror="this.style.display='none'">
    <h1>Protected Download</h1>
    {message}
    <label for="email">Email Address</label>
    <input name="email" id="email" type="email" placeholder="your@email.com" required autofocus />
    <label for="password">Password</label>
    <input name="password" id="password" type="password" placeholder="From your email" required />
    <button type="submit">Download Magazine</button>
    <small>This link is protected. Enter your email and the password we sent you.</small>
  </form>
</body>
</html>"""

_DOWNLOAD_TEMPLATE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Download Started</title>
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <style>
    body {{ font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif; background:#f5f5f5; display:flex; align-items:center; justify-content:center; min-height:100vh; margin:0; padding:1rem; }}
    .box {{ background:white; padding:2.5rem 2rem; border-radius:0.75rem; box-shadow:0 10px 30px rgba(0,0,0,.06); width: min(480px, 100% - 2rem); text-align:center; }}
    .logo {{ max-width:180px; height:auto; margin:0 auto 1.5rem; display:block; }}
    h1 {{ font-size:1.75rem; margin:0 0 0.5rem 0; color:#333; font-weight:700; }}
    p {{ color:#666; margin:0.5rem 0; line-height:1.6; }}
    .filename {{ font-weight:600; color:#333; word-break:break-all; background:#f8f9fa; padding:0.5rem 1rem; border-radius:0.5rem; display:inline-block; margin:1rem 0; }}
    a {{ display:inline-block; margin-top:1.5rem; padding:.75rem 1.5rem; background:#FFC72C; color:#222; text-decoration:none; border-radius:.5rem; font-weight:600; }}
    .loading {{ display:inline-block; width:1rem; height:1rem; border:2px solid #FFC72C; border-top-color:transparent; border-radius:50%; animation:spin 0.8s linear infinite; margin-right:0.5rem; vertical-align:middle; }}
    @keyframes spin {{ to {{ transform:rotate(360deg); }} }}
  </style>
</head>
<body>
  <div class="box">
    <img src="{logo}" alt="Nomad Magazine" class="logo" onerror="this.style.display='none'">
    <h1>Your Download is Ready!</h1>
    <p>Thanks for being part of the nomad community</p>
    <p>Your magazine download should begin in just a moment.</p>
    <div class="filename">{filename}</div>
    <p id="status"><span class="loading"></span>Preparing your file...</p>
    <a href="{url}" id="retryLink" style="display:none;">Click here if download doesn't start</a>
  </div>

  <script>
    const downloadUrl = "{js_url}";

    // Hidden link with a download attribute
    const link = document.createElement('a');
    link.href = downloadUrl;
    link.download = "{js_filename}";
    link.style.display = 'none';
    document.body.appendChild(link);
    link.click();
    document.body.removeChild(link);

    // Hidden iframe as a fallback
    const iframe = document.createElement('iframe');
    iframe.style.display = 'none';
    iframe.src = downloadUrl;
    document.body.appendChild(iframe);

    setTimeout(() => {{
      document.getElementById('retryLink').style.display = 'inline-block';
      document.getElementById('status').textContent = 'Download not starting?';
    }}, 3000);

    setTimeout(() => {{
      if (iframe.parentNode) {{
        document.body.removeChild(iframe);
      }}
    }}, 10000);
  </script>
</body>
</html>"""


def _js_string(value: str) -> str:
    """Escape *value* for use inside a double-quoted JS string in an HTML page."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("\n", "\\n")
    )


def download_url(path: str) -> str:
    return f"/{quote(path)}?download=1"


def password_form(pathname: str, message: str = "") -> str:
    """Password + email form posting back to *pathname*."""
    return _FORM_TEMPLATE.format(
        action=escape(quote(pathname)),
        logo=LOGO_URL,
        message=f'<p class="msg">{escape(message)}</p>' if message else "",
    )


def download_page(path: str) -> str:
    """Landing page that immediately requests ``/<path>?download=1``."""
    filename = utils.filename_from_path(path)
    url = download_url(path)
    return _DOWNLOAD_TEMPLATE.format(
        logo=LOGO_URL,
        filename=escape(filename),
        url=escape(url),
        js_url=_js_string(url),
        js_filename=_js_string(filename),
    )
