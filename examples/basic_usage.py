#!/usr/bin/env python3
"""Basic usage example"""

from logaro import LoggerBuilder, LogLevel, mask

def main():
    # Create the root logger with builder pattern
    log = (LoggerBuilder()
        .with_level(LogLevel.DEBUG)
        .with_utc()
        .build())

    # Derive loggers carrying context fields
    service_log = log.child({"service": "billing"})
    request_log = service_log.with_fields({"request_id": "c0ffee"})

    # Mask sensitive fields on one branch only
    payment_log = request_log.with_serializers({"card": mask})

    # Log messages
    log.debug("This is debug")
    service_log.info("Service started", {"port": 8080})
    request_log.warn("Slow upstream", {"ms": 1250})
    payment_log.error("Payment declined", {"card": "4111111111111111"})
    log.log("trace", "Unknown levels are never written at this threshold")

if __name__ == "__main__":
    main()
