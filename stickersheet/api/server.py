import logging

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from stickersheet import __version__
from stickersheet.config import MIN_MANUAL_SPAN, SegmentationConfig
from stickersheet.errors import SurfaceError
from stickersheet.geometry import Rect
from stickersheet.processors.extractor import extract_sticker_from_rect
from stickersheet.processors.mask import open_raster
from stickersheet.processors.pipeline import process_sticker_sheet

logger = logging.getLogger(__name__)

app = FastAPI(title="Sticker Sheet Segmentation API")


async def _read_sheet(upload: UploadFile):
    if not upload.content_type or not upload.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")

    content = await upload.read()
    try:
        return open_raster(content)
    except SurfaceError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/segment")
async def segment_endpoint(
    sheet: UploadFile = File(..., description="Sticker sheet image"),
):
    """
    Split a sticker sheet into individual stickers.

    - **sheet**: image with stickers on a near-white background

    Returns every sticker as a base64 PNG with its position on the sheet.
    `detected` is false when nothing was found.
    """
    raster = await _read_sheet(sheet)
    messages = []
    segments = process_sticker_sheet(raster, on_progress=messages.append, config=SegmentationConfig())

    return JSONResponse(
        status_code=200,
        content={
            "detected": bool(segments),
            "count": len(segments),
            "messages": messages,
            "stickers": [segment.as_dict() for segment in segments],
        },
    )


@app.post("/extract")
async def extract_endpoint(
    sheet: UploadFile = File(..., description="Sticker sheet image"),
    min_x: int = Form(...),
    min_y: int = Form(...),
    max_x: int = Form(...),
    max_y: int = Form(...),
    name: str = Form("sticker"),
):
    """
    Cut a single sticker out of a manually selected rectangle.

    Selections spanning MIN_MANUAL_SPAN pixels or less on either axis are
    rejected as accidental clicks.
    """
    rect = Rect.from_corners(min_x, min_y, max_x, max_y)
    if rect.max_x - rect.min_x <= MIN_MANUAL_SPAN or rect.max_y - rect.min_y <= MIN_MANUAL_SPAN:
        raise HTTPException(status_code=400, detail="Selection is too small")

    raster = await _read_sheet(sheet)
    segment = extract_sticker_from_rect(raster, rect, name)
    if segment is None:
        raise HTTPException(status_code=422, detail="No sticker found in the selection")

    logger.info("Extracted %s from %s", segment.display_name, rect)
    return JSONResponse(status_code=200, content=segment.as_dict())


@app.get("/")
async def root():
    return {"message": "Sticker Sheet Segmentation API", "version": __version__}


@app.get("/health")
async def health():
    return {"status": "healthy"}
