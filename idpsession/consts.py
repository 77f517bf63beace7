name = "idpsession"
version = "0.4.0"
author = "idpsession contributors"

default_json_headers = [
    ("Content-Type", "application/json"),
    ("Cache-Control", "no-store"),
    ("Pragma", "no-cache"),
]

default_html_headers = [
    ("Content-Type", "text/html; charset=utf-8"),
    ("Cache-Control", "no-store, no-cache, max-age=0"),
    ("Pragma", "no-cache"),
]
