"""API routes for key extraction from uploaded dump files."""

import base64

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from pydantic import BaseModel

from mfckeys.errors import InvalidSizeError, TruncatedReadError
from mfckeys.rfid.dump_reader import extract_keys
from mfckeys.rfid.key_writer import OutputFormat, encode

router = APIRouter(prefix="/api/keys", tags=["keys"])


# ──────────────────────────────────────────────
# Response models
# ──────────────────────────────────────────────

class KeyFile(BaseModel):
    filename: str
    data: str  # Base64-encoded file contents
    size: int


class ExportResponse(BaseModel):
    uid: str
    card: str
    files: list[KeyFile]


# ──────────────────────────────────────────────
# Routes
# ──────────────────────────────────────────────

@router.post("/decode/file")
async def decode_file(file: UploadFile = File(...)):
    """Decode an uploaded raw dump into its UID and sector keys."""
    data = await file.read()
    try:
        card = extract_keys(data)
    except (InvalidSizeError, TruncatedReadError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return card.to_dict()


@router.post("/export/file", response_model=ExportResponse)
async def export_file(
    file: UploadFile = File(...),
    fmt: OutputFormat = Query(OutputFormat.PROXMARK_BIN),
):
    """Convert an uploaded raw dump into mfocGUI or Proxmark key files."""
    data = await file.read()
    try:
        card = extract_keys(data)
    except (InvalidSizeError, TruncatedReadError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    files = [
        KeyFile(
            filename=buf.filename,
            data=base64.b64encode(buf.data).decode("ascii"),
            size=len(buf.data),
        )
        for buf in encode(card.uid, card.keys, fmt)
    ]
    return ExportResponse(uid=card.uid_hex, card=card.geometry.label, files=files)
