"""
Structured logging for indexing, persistence and query operations.
"""

import logging
from typing import Any, Dict, List


class StructuredLogger:
    """Structured logger for vector index, ingestion and query operations."""

    def __init__(self, name: str = "doclens"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status == "failed":
            self.logger.error(message)
        else:
            self.logger.info(message)

    def log_vector_operation(self, operation: str, ordinal: int, details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector store operation on a single ordinal."""
        log_details = {"ordinal": ordinal}
        if details:
            log_details.update(details)

        self.log_operation(f"vector.{operation}", status, log_details)

    def log_index_persistence(self, operation: str, index_path: str, count: int, status: str = "success", details: Dict[str, Any] = None):
        """Log an index load, create or save."""
        log_details = {"index_path": index_path, "count": count}
        if details:
            log_details.update(details)

        self.log_operation(f"index.{operation}", status, log_details)

    def log_ingest_checkpoint(self, ingested: int, total: int, count: int):
        """Log an ingestion progress checkpoint."""
        self.log_operation("ingest.checkpoint", "saved", {
            "ingested": ingested,
            "total": total,
            "index_count": count,
        })

    def log_query(self, query: str, k: int, result_count: int, status: str = "success"):
        """Log a query pipeline answer."""
        self.log_operation("query.answer", status, {
            "query": sanitize_payload(query),
            "k": k,
            "result_count": result_count,
        })

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


def sanitize_payload(payload: Any, max_length: int = 50) -> Any:
    """Truncate long strings (recursively) before they reach a log line."""
    if isinstance(payload, dict):
        return {k: sanitize_payload(v, max_length) for k, v in payload.items()}
    elif isinstance(payload, str):
        return payload[:max_length] + "..." if len(payload) > max_length else payload
    elif isinstance(payload, list):
        return [sanitize_payload(item, max_length) for item in payload]
    else:
        return payload


# Global logger instance
logger = StructuredLogger()
