"""Admin API routes for the SMTP settings screen."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from smtp_settings.config import settings
from smtp_settings.database import get_db
from smtp_settings.exceptions import InvalidNonceException
from smtp_settings.schemas.common import APIResponse
from smtp_settings.schemas.smtp_settings import SaveSettingsRequest, TestEmailRequest
from smtp_settings.services.i18n_service import get_i18n_service
from smtp_settings.services.sanitizer import sanitize_settings
from smtp_settings.services.settings_store import get_settings_store
from smtp_settings.services.validation import check_configuration_issues
from smtp_settings.services.verification_service import get_verification_service
from smtp_settings.utils.permissions import (
    Capability,
    get_current_principal,
    require_capability,
)
from smtp_settings.utils.request_context import get_current_language
from smtp_settings.utils.security import (
    NONCE_SAVE_SETTINGS,
    NONCE_TEST_EMAIL,
    create_nonce,
    verify_nonce,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/smtp-settings", tags=["SMTP Settings"])


@router.get("")
@require_capability(Capability.MANAGE_OPTIONS)
async def get_smtp_settings(
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Settings form data: masked record, advisory issues and fresh nonces."""
    principal = get_current_principal()
    record = await get_settings_store().get_record(db)

    return APIResponse(
        status="success",
        data={
            "settings": record.masked(),
            "issues": check_configuration_issues(record, get_current_language()),
            "nonces": {
                "save": create_nonce(NONCE_SAVE_SETTINGS, principal.user_id),
                "test_email": create_nonce(NONCE_TEST_EMAIL, principal.user_id),
            },
            "system_admin_email": settings.admin_email,
        },
    )


@router.put("")
@require_capability(Capability.MANAGE_OPTIONS)
async def update_smtp_settings(
    request: SaveSettingsRequest,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Sanitize and save the submitted settings.

    Configuration issues are reported alongside but never block the save.
    """
    principal = get_current_principal()
    lang = get_current_language()

    if not verify_nonce(request.nonce, NONCE_SAVE_SETTINGS, principal.user_id):
        raise InvalidNonceException(get_i18n_service().t("settings.invalid_nonce", lang))

    store = get_settings_store()
    previous = await store.get_record(db)
    record = sanitize_settings(request.settings, previous)
    await store.save_record(db, record)

    return APIResponse(
        status="success",
        data={
            "settings": record.masked(),
            "issues": check_configuration_issues(record, lang),
        },
        message=get_i18n_service().t("settings.saved", lang),
    )


@router.post("/test")
async def send_test_email(
    body: TestEmailRequest,
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Send a test email using the stored settings."""
    message = await get_verification_service().send_test_email(
        db,
        principal=get_current_principal(),
        nonce=body.nonce,
        recipient=body.to,
        lang=get_current_language(),
    )
    return APIResponse(status="success", message=message)
