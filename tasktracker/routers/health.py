from fastapi import APIRouter

router = APIRouter()


@router.get("/")
def read_root():
    return {"message": "Task Tracker API"}


@router.get("/api/health")
def health():
    return {"status": "OK", "message": "Task Tracker API is running"}
