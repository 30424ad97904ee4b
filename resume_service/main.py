import json
import logging
import re
from typing import Callable

from botocore.exceptions import ClientError, NoCredentialsError
from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from pydantic import BaseModel

from resume_service.config import load_settings
from resume_service.errors import (
    SchemaValidationError,
    TranslationError,
    TranslatorConfigError,
    UnsupportedFormatError,
    UnsupportedLanguageError,
)
from resume_service.parsing.pipeline import parse_document
from resume_service.s3_client import download_presigned, fetch_object_bytes
from resume_service.schema import validate_record
from resume_service.translate.languages import DEFAULT_LANGUAGES
from resume_service.translate.record import translate_record
from resume_service.translate.translator import Translator, get_translator

settings = load_settings()

app = FastAPI(title="Resume Parser & Translator")
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("resume-service")
logger.setLevel(settings.log_level)


class ParseRequest(BaseModel):
    userId: str
    resumeId: str
    s3Bucket: str
    s3Key: str
    fileType: str
    # Optional: if provided, the file is downloaded via HTTPS instead of with AWS creds
    s3PresignedUrl: str | None = None


class TranslateRequest(BaseModel):
    resume: dict | None = None
    language: str | None = None


def _validate_request(req: ParseRequest):
    # The key must live under the userId folder unless a presigned URL is used
    if req.s3PresignedUrl:
        return
    if not re.search(rf"(^|/){re.escape(req.userId)}(/|$)", req.s3Key):
        raise HTTPException(
            status_code=400,
            detail="s3Key does not appear to belong to the provided userId"
        )


def _log_result(label: str, result: dict):
    if not settings.log_response:
        return
    dumped = json.dumps(result, ensure_ascii=False)
    logger.info("%s response=%s", label, dumped[:4000])


def _parse_bytes(data: bytes, file_type: str | None, filename: str | None) -> dict:
    try:
        raw_text, parsed = parse_document(data, file_type, filename, max_pages=settings.max_pdf_pages)
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SchemaValidationError:
        # Parser output should always conform; treat as a bug
        logger.exception("Parser produced a record that failed shape validation")
        raise HTTPException(status_code=500, detail="Parser produced an invalid resume record")

    return {
        "filename": filename,
        "rawTextPreview": raw_text[: settings.raw_preview_chars],
        "parsed": parsed,
    }


def get_translator_factory() -> Callable[[], Translator]:
    # Built lazily so payload errors are reported before backend configuration errors
    return lambda: get_translator(settings)


@app.post("/v1/upload")
async def upload_v1(file: UploadFile | None = File(None)):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="Missing file")
    data = await file.read()
    try:
        result = _parse_bytes(data, None, file.filename)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unhandled error in /v1/upload")
        raise HTTPException(status_code=500, detail=str(e) or "Upload failed")
    _log_result(f"Parsed upload filename={file.filename}", result)
    return result


@app.post("/v1/parse")
def parse_v1(req: ParseRequest):
    try:
        _validate_request(req)
        if req.s3PresignedUrl:
            data = download_presigned(req.s3PresignedUrl)
        else:
            data = fetch_object_bytes(req.s3Bucket, req.s3Key)
        filename = req.s3Key.rsplit("/", 1)[-1]
        result = _parse_bytes(data, req.fileType, filename)
        _log_result(f"Parsed resume userId={req.userId} resumeId={req.resumeId}", result)
        return result
    except HTTPException:
        raise
    except NoCredentialsError:
        logger.exception("AWS credentials not found")
        raise HTTPException(status_code=401, detail="AWS credentials not configured for resume-service")
    except ClientError as e:
        # Common S3 errors: NoSuchKey, AccessDenied, InvalidAccessKeyId, etc.
        code = (e.response.get("Error", {}) or {}).get("Code", "ClientError")
        msg = (e.response.get("Error", {}) or {}).get("Message", str(e))
        logger.exception("AWS ClientError: %s %s", code, msg)
        if code in {"NoSuchKey", "NoSuchBucket"}:
            raise HTTPException(status_code=404, detail=f"S3 not found: {code}")
        if code in {"AccessDenied"}:
            raise HTTPException(status_code=403, detail="S3 access denied for resume-service")
        if code in {"InvalidAccessKeyId", "SignatureDoesNotMatch"}:
            raise HTTPException(status_code=401, detail=f"AWS credentials error: {code}")
        raise HTTPException(status_code=400, detail=f"AWS error: {code}")
    except Exception as e:
        logger.exception("Unhandled error in /v1/parse")
        raise HTTPException(status_code=500, detail=str(e))


# Alternate path support (helps when a gateway rewrites /parse)
@app.post("/parse")
def parse_alias(req: ParseRequest):
    return parse_v1(req)


@app.post("/v1/translate")
async def translate_v1(
    req: TranslateRequest,
    make_translator: Callable[[], Translator] = Depends(get_translator_factory),
):
    if not req.resume:
        raise HTTPException(status_code=400, detail="Missing resume")
    if not req.language or req.language not in DEFAULT_LANGUAGES:
        raise HTTPException(
            status_code=400,
            detail="Invalid language. Use one of: " + ", ".join(DEFAULT_LANGUAGES.codes),
        )
    try:
        resume = validate_record(req.resume)
    except SchemaValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        translator = make_translator()
    except TranslatorConfigError as e:
        logger.exception("Translator is not configured")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("Translating resume to %s", req.language)
    try:
        translated = await translate_record(
            resume,
            req.language,
            translator,
            max_concurrency=settings.translate_max_concurrency,
        )
    except UnsupportedLanguageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TranslatorConfigError as e:
        logger.exception("Translator is not configured")
        raise HTTPException(status_code=500, detail=str(e))
    except TranslationError as e:
        logger.exception("Translation failed")
        raise HTTPException(status_code=502, detail=str(e))
    return {"translated": translated}


@app.get("/v1/languages")
def languages():
    return {"languages": DEFAULT_LANGUAGES.codes}


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/ready")
def ready():
    return {"ready": True}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("resume_service.main:app", host="0.0.0.0", reload=True, port=6000)
