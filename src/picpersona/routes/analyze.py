import logging
import random
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .. import config
from ..content import normalize_language, not_portrait_message, resolve_content
from ..db import get_client
from ..errors import (
    ImageDecodeError,
    ImageTooLargeError,
    PersistenceError,
    PicPersonaError,
    UnknownCategoryError,
    UnsupportedImageTypeError,
)
from ..models import (
    AnalysisRecord,
    Category,
    CategorizationResult,
    CategoryContent,
    Gender,
    ImageFeatures,
    Language,
    StatsResponse,
)
from ..rules import CATEGORIES
from ..scoring import align_category, determine_personality, normalize_gender
from ..utils.analyze_utils import analyze_image, check_upload
from ..utils.store_utils import fetch_results, save_result, summarize_results

logger = logging.getLogger(__name__)

router = APIRouter(tags=["personality"])


def get_rng() -> random.Random:
    """Random source for the variety override and the "no face" message."""
    return random.Random()


def get_store():
    """Supabase client, or None when results are not persisted."""
    if not config.PERSIST_RESULTS:
        return None
    try:
        return get_client()
    except PersistenceError as exc:
        logger.error("persistence enabled but unavailable: %s", exc)
        raise HTTPException(500, str(exc))


def _http_error(exc: PicPersonaError) -> HTTPException:
    if isinstance(exc, UnsupportedImageTypeError):
        return HTTPException(400, "Unsupported image type")
    if isinstance(exc, ImageDecodeError):
        return HTTPException(400, "Cannot read image")
    if isinstance(exc, ImageTooLargeError):
        return HTTPException(413, str(exc))
    if isinstance(exc, UnknownCategoryError):
        return HTTPException(400, str(exc))
    return HTTPException(500, str(exc))


def _not_portrait(language: Language, rng: random.Random) -> HTTPException:
    return HTTPException(
        422,
        {"code": "NOT_PORTRAIT", "message": not_portrait_message(language, rng)},
    )


def _build_result(
    category: Category,
    language: Language,
    gender: Gender,
    features: Optional[ImageFeatures],
    sb,
) -> CategorizationResult:
    """Resolve the copy for a category and store the record if enabled."""
    content = resolve_content(category, language)
    result = CategorizationResult(
        **content.model_dump(),
        confidence=features.face_confidence if features else None,
        language=language,
        gender=gender,
        features=features,
        created_at=datetime.now(timezone.utc),
    )

    if sb is not None:
        record = AnalysisRecord(
            category=category,
            confidence=result.confidence,
            language=language,
            gender=gender,
            features=features.model_dump(mode="json", by_alias=True) if features else None,
            created_at=result.created_at,
        )
        try:
            save_result(sb, record)
        except PersistenceError as exc:
            logger.error("could not store result: %s", exc)
            raise HTTPException(500, str(exc))

    logger.info("categorized as %s (%s, gender=%s)", category, language, gender)
    return result


"""
End-to-end endpoint: analyze an uploaded portrait and return its category.

Parameters:
    image (UploadFile):
        JPEG / PNG / GIF / WebP photo, at most MAX_UPLOAD_BYTES.
    gender (Optional[str]):
        "male" / "female" restrict the outcome; anything else keeps all four.
    language (Optional[str]):
        "ko" (default) or "en".

Process:
    1. Validate type and size, decode, enforce the pixel cap.
    2. Normalize onto the 224x224 canvas and extract features.
    3. Score; no detected face means 422 NOT_PORTRAIT, never a category.
    4. Resolve localized copy and store the record (if enabled).

Returns:
    CategorizationResult
"""
@router.post("/analyze", response_model=CategorizationResult)
async def analyze(
    image: UploadFile = File(...),
    gender: Optional[str] = Form(default=None),
    language: Optional[str] = Form(default=None),
    rng: random.Random = Depends(get_rng),
    sb=Depends(get_store),
):
    lang = normalize_language(language)
    declared = normalize_gender(gender)

    try:
        # multipart bodies are spooled with a known size; refuse before reading
        if image.size is not None:
            check_upload(image.content_type, image.size)
        data = await image.read()
        check_upload(image.content_type, len(data))
        features = await run_in_threadpool(analyze_image, data)
    except PicPersonaError as exc:
        logger.warning("rejected upload %r: %s", image.filename, exc)
        raise _http_error(exc)

    category = determine_personality(features, declared, rng=rng)
    if category is None:
        logger.info("no face detected in %r", image.filename)
        raise _not_portrait(lang, rng)

    return _build_result(category, lang, declared, features, sb)


"""
Client-scored flow: the browser already picked a category and only needs
the localized copy (and the record stored).

Parameters:
    analysisResult: category label chosen by the client.
    imageFeatures: optional JSON feature record the client computed.
    gender / language: as for /analyze. A declared gender moves the label
        onto that gender, keeping its teto/egen side.
"""
@router.post("/categorize", response_model=CategorizationResult)
async def categorize(
    analysis_result: str = Form(..., alias="analysisResult"),
    gender: Optional[str] = Form(default=None),
    language: Optional[str] = Form(default=None),
    image_features: Optional[str] = Form(default=None, alias="imageFeatures"),
    rng: random.Random = Depends(get_rng),
    sb=Depends(get_store),
):
    lang = normalize_language(language)
    declared = normalize_gender(gender)

    if analysis_result not in CATEGORIES:
        raise _http_error(UnknownCategoryError(analysis_result))

    features: Optional[ImageFeatures] = None
    if image_features:
        try:
            features = ImageFeatures.model_validate_json(image_features)
        except ValidationError as exc:
            raise HTTPException(400, f"Invalid imageFeatures: {exc.error_count()} error(s)")
        if not features.face_detected:
            raise _not_portrait(lang, rng)

    category = align_category(analysis_result, declared)  # type: ignore[arg-type]
    return _build_result(category, lang, declared, features, sb)


@router.get("/categories/{category}", response_model=CategoryContent)
def category_content(category: str, language: Optional[str] = Query(default=None)):
    try:
        return resolve_content(category, language)
    except UnknownCategoryError as exc:
        raise HTTPException(404, str(exc))


@router.get("/stats", response_model=StatsResponse)
def stats(sb=Depends(get_store)):
    if sb is None:
        return StatsResponse(total=0)
    try:
        rows = fetch_results(sb)
    except PersistenceError as exc:
        raise HTTPException(500, str(exc))
    return summarize_results(rows)
