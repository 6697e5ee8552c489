"""FastAPI application for the Ad-Lib Mixer (packaged)."""

import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse, JSONResponse, Response

from modules.mixer import TrackInput
from modules.mixer.errors import DecodeError, EncodeError
from modules.pipeline import (
    EmptyUploadError,
    MixResponse,
    MixService,
    UploadTooLargeError,
)
from modules.pipeline.registry import get_mix_service, warm_up


if not logging.getLogger().handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

logger = logging.getLogger("adlib.api")

# Initialize FastAPI app
app = FastAPI(
    title="Ad-Lib Mixer",
    description="Mix a microphone take over an uploaded backing track",
    version="1.0.0"
)


@app.on_event("startup")
async def _startup_storage():
    warm_up()


def _track(upload: UploadFile, data: bytes, gain: float) -> TrackInput:
    # No format hint: WAV is sniffed from its header, ffmpeg detects the rest
    return TrackInput(data=data, gain=gain, name=upload.filename)


def _upload_error(err: ValueError) -> HTTPException:
    if isinstance(err, UploadTooLargeError):
        return HTTPException(status_code=413, detail=str(err))
    return HTTPException(status_code=400, detail=str(err))


@app.post("/api/audio/mix")
async def mix_audio(
    original: UploadFile = File(...),
    mic: UploadFile = File(...),
    original_gain: float = Form(1.0),
    mic_gain: float = Form(1.0),
    store: bool = Form(False),
    service: MixService = Depends(get_mix_service),
):
    """Mix the original track with the microphone take.

    Args:
        original: Backing track upload
        mic: Microphone recording upload
        original_gain: Linear gain for the backing track
        mic_gain: Linear gain for the recording
        store: If True, keep the mix on the server and return its URL;
               otherwise return the WAV bytes directly

    Returns:
        audio/wav response, or JSON describing the stored mix
    """
    try:
        service.check_upload_size(original.size, "Original")
        service.check_upload_size(mic.size, "Mic")
        first = _track(original, await original.read(), original_gain)
        second = _track(mic, await mic.read(), mic_gain)

        if store:
            record = await service.mix_and_store(first, second)
            payload = MixResponse.from_record(record, service.url_for(record.path))
            return JSONResponse(content=payload.to_dict())

        result = await service.mix(first, second)
        return Response(
            content=result.wav,
            media_type="audio/wav",
            headers={"Content-Disposition": 'attachment; filename="mix.wav"'},
        )

    except HTTPException:
        raise
    except (EmptyUploadError, UploadTooLargeError) as e:
        raise _upload_error(e)
    except (DecodeError, EncodeError) as e:
        logger.info("Mix rejected: %s", e)
        return JSONResponse(
            content=MixResponse(status="error", detail=e.user_message).to_dict(),
            status_code=422,
        )
    except Exception as e:
        logger.exception("Mix failed: %s", e)
        return JSONResponse(
            content=MixResponse(status="error", detail=f"Audio mix failed: {e}").to_dict(),
            status_code=500,
        )


@app.post("/api/audio/upload-original")
async def upload_original(
    file: UploadFile = File(...),
    service: MixService = Depends(get_mix_service),
):
    """Store an original (backing) track and return its URL."""
    try:
        service.check_upload_size(file.size, "Original")
        upload = service.save_upload(await file.read(), file.filename, prefix="original")
    except (EmptyUploadError, UploadTooLargeError) as e:
        raise _upload_error(e)
    return upload.to_dict()


@app.post("/api/audio/upload-mixed")
async def upload_mixed(
    file: UploadFile = File(...),
    source_files: Optional[List[str]] = Form(None),
    service: MixService = Depends(get_mix_service),
):
    """Store a mix rendered in the browser and record its metadata."""
    try:
        service.check_upload_size(file.size, "Mix")
        record = service.save_mixed_upload(await file.read(), file.filename, source_files or [])
    except (EmptyUploadError, UploadTooLargeError) as e:
        raise _upload_error(e)
    return MixResponse.from_record(record, service.url_for(record.path)).to_dict()


@app.get("/api/mixes")
async def list_mixes(service: MixService = Depends(get_mix_service)):
    return [
        {**r.to_dict(), "url": service.url_for(r.path)}
        for r in service.list_mixes()
    ]


@app.get("/api/mixes/{mix_id}")
async def get_mix(mix_id: str, service: MixService = Depends(get_mix_service)):
    record = service.get_mix(mix_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Mix not found")
    return {**record.to_dict(), "url": service.url_for(record.path)}


@app.delete("/api/mixes/{mix_id}")
async def delete_mix(mix_id: str, service: MixService = Depends(get_mix_service)):
    if not service.delete_mix(mix_id):
        raise HTTPException(status_code=404, detail="Mix not found")
    return {"deleted": True}


@app.get("/uploads/{filename}")
async def download_file(filename: str, service: MixService = Depends(get_mix_service)):
    """Download a stored upload or mix."""
    file_path = service.resolve_upload(filename)
    if file_path is None:
        raise HTTPException(status_code=404, detail="File not found")

    media_type = "audio/wav" if file_path.suffix == ".wav" else None
    return FileResponse(path=file_path, filename=filename, media_type=media_type)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "Ad-Lib Mixer"}
