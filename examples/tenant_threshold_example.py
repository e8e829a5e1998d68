#!/usr/bin/env python3
"""
Example: per-tenant log thresholds driven by ambient context
"""

import logging

from dynamic_logging import (
    DynamicThresholdConfig,
    context_scope,
    get_logger,
    log_with_context,
    request_context,
)


def main():
    # Tenant "acme" is being debugged, everyone else only logs errors
    config = DynamicThresholdConfig(
        key="tenant",
        thresholds=[("acme", "DEBUG"), ("globex", "WARN")],
        default_threshold="ERROR",
        on_match="ACCEPT",
        on_mismatch="DENY",
    )
    logger = get_logger("tenant_service", config)

    # No tenant in context: the filter abstains and the logger level decides
    logger.info("Service starting")

    for tenant in ("acme", "globex", "initech"):
        with request_context(tenant=tenant):
            logger.debug("Loaded tenant settings")
            logger.warning("Quota at 90%")
            log_with_context(logger, "error", "Payment failed", config, amount=42)

    # Plain stdlib calls are filtered as well
    with context_scope(tenant="acme"):
        logger.log(logging.DEBUG, "Cache warmed")


if __name__ == "__main__":
    main()
