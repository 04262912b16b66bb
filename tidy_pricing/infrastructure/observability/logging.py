"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from tidy_pricing.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_pricing_resolution(source: str, error: Optional[str], duration_ms: float) -> None:
    """Log where pricing came from; fallbacks are warnings so they stand out"""
    extra = {
        "step": "pricing_resolve",
        "pricing_source": source,
        "duration_ms": duration_ms,
    }
    if error:
        logging.warning("Using fallback pricing", extra={**extra, "error": error})
    elif source == "config":
        logging.warning("Pricing service returned no configuration, using fallback pricing", extra=extra)
    else:
        logging.info("Pricing resolved", extra=extra)


def log_cancellation_evaluation(
    request_id: str,
    within_penalty_window: bool,
    estimated_refund: str,
    cleaner_payout: str,
    will_charge_cancellation_fee: bool,
) -> None:
    """Log structured cancellation outcome for analysis"""
    logging.info(
        "Cancellation evaluated",
        extra={
            "request_id": request_id,
            "step": "cancellation_evaluate",
            "penalty_window": within_penalty_window,
            "estimated_refund": estimated_refund,
            "cleaner_payout": cleaner_payout,
            "cancellation_fee_charged": will_charge_cancellation_fee,
        },
    )
