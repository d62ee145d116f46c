from fastapi import APIRouter, Request, status

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health(request: Request):
    registry = getattr(request.app.state, "receivers", None)
    return {
        "ok": True,
        "checks": {"receivers": registry.names() if registry is not None else []},
    }
