from fastapi import FastAPI, File, HTTPException, Query, UploadFile

from . import __version__
from .convert import convert_bytes
from .models import ConvertResponse, HealthResponse, Mode
from .rules import DEFAULT_TAB_WIDTH

app = FastAPI(
    title="tabify",
    description="Convert leading whitespace between tabs and spaces",
    version=__version__,
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/convert", response_model=ConvertResponse)
async def convert_file(
    file: UploadFile = File(...),
    mode: Mode = Query(Mode.TABIFY),
    width: int = Query(DEFAULT_TAB_WIDTH, gt=0),
):
    raw = await file.read()
    if b"\x00" in raw:
        raise HTTPException(status_code=422, detail="Binary files are not supported")

    return convert_bytes(raw, mode, width)
