from fastapi import Request


async def json_body(request: Request):
    """Parsed JSON request body, or None when the body is empty or malformed."""
    try:
        return await request.json()
    except ValueError:
        return None
