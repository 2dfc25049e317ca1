import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

from dotenv import load_dotenv

load_dotenv()

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response

from app.display_client import DisplayClient, render_page
from lambdas.search_books import lambda_handler
from settings import AppConfig

logger = logging.getLogger("books-search-app")

app = FastAPI()

display_client = DisplayClient(AppConfig.get_value("api_base"))


def _to_event(request: Request) -> dict:
    """Shape a local request like the API Gateway proxy event the Lambda receives"""
    params = dict(request.query_params)
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "queryStringParameters": params or None,
    }


# --- FastAPI endpoints ---
@app.api_route("/books", methods=["GET", "OPTIONS"])
def books_endpoint(request: Request):
    envelope = lambda_handler(_to_event(request), None)
    return Response(
        content=envelope["body"],
        status_code=envelope["statusCode"],
        headers=envelope.get("headers") or {},
    )


@app.get("/", response_class=HTMLResponse)
def search_page(q: Optional[str] = None):
    return render_page(q, display_client.render(q))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
