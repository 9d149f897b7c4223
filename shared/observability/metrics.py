from prometheus_client import Counter

# Business Metrics
orders_created_total = Counter(
    "orders_created_total",
    "Total orders accepted by the intake endpoint"
)

orders_processed_total = Counter(
    "orders_processed_total",
    "Total orders moved from pending to processed"
)

orders_auth_failures_total = Counter(
    "orders_auth_failures_total",
    "Total requests rejected for a bad or missing API key",
    ["scope"] # Labels: 'orders:list', 'orders:update'
)

orders_storage_failures_total = Counter(
    "orders_storage_failures_total",
    "Total storage errors surfaced to clients",
    ["operation"] # Labels: 'create_order', 'list_pending', 'mark_processed'
)
