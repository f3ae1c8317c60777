from sqlmodel import Session, select
from sqlalchemy.exc import SQLAlchemyError
from app.models.company_settings import CompanySettings, CompanyInfo, FeaturePricing, PaymentTerms
from app.exceptions import PersistenceError
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


def get_company_settings(db: Session) -> CompanySettings:
    """Return the settings row, creating it with defaults on first access."""
    settings = db.exec(select(CompanySettings).order_by(CompanySettings.id)).first()
    if settings:
        return settings

    logger.info("🔧 No company settings found, creating defaults.")
    return _save(db, CompanySettings())


def _save(db: Session, settings: CompanySettings) -> CompanySettings:
    try:
        settings.updated_at = datetime.utcnow()
        db.add(settings)
        db.commit()
        db.refresh(settings)
        return settings
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to save company settings: {str(e)}")
        db.rollback()
        raise PersistenceError("Failed to save company settings")


def update_company_info(db: Session, info: CompanyInfo) -> CompanySettings:
    settings = get_company_settings(db)
    settings.set_company_info(info)
    logger.info(f"Updated company info for {info.company_name}")
    return _save(db, settings)


def update_feature_pricing(db: Session, pricing: FeaturePricing) -> CompanySettings:
    settings = get_company_settings(db)
    settings.set_feature_pricing(pricing)
    logger.info("Updated feature pricing settings")
    return _save(db, settings)


def update_payment_terms(db: Session, terms: PaymentTerms) -> CompanySettings:
    settings = get_company_settings(db)
    settings.set_payment_terms(terms)
    logger.info("Updated payment terms settings")
    return _save(db, settings)
