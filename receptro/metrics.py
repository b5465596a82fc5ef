from prometheus_client import Counter, Gauge, Histogram

# === Common HTTP Metrics ===

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "endpoint", "method", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["service", "endpoint", "method"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)

service_health_status = Gauge(
    "service_health_status",
    "Current health status of the service (2=healthy, 1=degraded, 0=down)",
    ["service"],
)

# === Upload Metrics ===

uploads_total = Counter(
    "uploads_total",
    "Total uploads processed, by pipeline branch",
    ["kind"],
)

upload_size_bytes = Histogram(
    "upload_size_bytes",
    "Decoded upload size in bytes",
    buckets=[1e3, 1e4, 1e5, 5e5, 1e6, 5e6, 1e7, 2.5e7],
)

unsupported_uploads_total = Counter(
    "unsupported_uploads_total",
    "Total uploads rejected for an unsupported MIME type",
)

# === Pipeline Metrics ===

pipeline_step_duration_seconds = Histogram(
    "pipeline_step_duration_seconds",
    "Duration of each pipeline step in seconds",
    ["step"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)

inference_calls_total = Counter(
    "inference_calls_total",
    "Total calls made to the inference provider",
    ["capability"],
)

inference_errors_total = Counter(
    "inference_errors_total",
    "Total failed calls to the inference provider",
    ["capability"],
)

intent_extraction_failures_total = Counter(
    "intent_extraction_failures_total",
    "Intent extraction outcomes that did not yield usable parameters",
    ["reason"],
)

processing_errors_total = Counter(
    "processing_errors_total",
    "Total errors that aborted a processing request",
    ["error_type"],
)
