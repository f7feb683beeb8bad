"""
Prometheus Metrics

Counters and histograms for encryption operations. Exposing them
(e.g. via prometheus_client.start_http_server) is left to the
embedding application.
"""

from typing import Optional

from prometheus_client import Counter, Histogram


# ===================================
# Operation Metrics
# ===================================

operations_total = Counter(
    "sealbox_operations_total",
    "Total number of encryption operations",
    ["operation", "status"],
)

message_size_bytes = Histogram(
    "sealbox_message_size_bytes",
    "Plaintext size in bytes",
    ["operation"],
    buckets=[64, 1024, 10240, 102400, 1024000, 10240000],  # 64B to 10MB
)


# ===================================
# Helper Functions
# ===================================

def track_operation(operation: str, status: str, size: Optional[int] = None):
    """
    Record an encryption operation.

    Args:
        operation: encrypt, decrypt or decrypt_best_effort
        status: success or the error code of the failure
        size: Plaintext size in bytes, for successful operations
    """
    operations_total.labels(operation=operation, status=status).inc()
    if size is not None:
        message_size_bytes.labels(operation=operation).observe(size)
