"""Web interface routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import HTMLResponse

router = APIRouter()


HOMEPAGE_HTML = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>URL Shortener Microservice</title>
  </head>
  <body>
    <h1>URL Shortener Microservice</h1>
    <p>URL Shortener Microservice is running</p>
    <form action="api/shorturl" method="POST">
      <label for="url_input">URL:</label>
      <input id="url_input" type="text" name="url" placeholder="https://www.freecodecamp.org">
      <input type="submit" value="POST URL">
    </form>
    <p>Example: <code>POST [project_url]/api/shorturl</code> with <code>url=https://www.freecodecamp.org</code>
       returns <code>{"original_url": "https://www.freecodecamp.org", "short_url": 1}</code>.</p>
    <p><code>GET [project_url]/api/shorturl/1</code> redirects to <code>https://www.freecodecamp.org</code>.</p>
  </body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the homepage with the submission form."""
    return HTMLResponse(content=HOMEPAGE_HTML)


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service

    health = await service.health_check()

    if health["overall"]:
        return {"status": "healthy"}
    else:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy",
        )
