# API Route Constants

# Base API
API_BASE = '/api'

# Order routes
ORDER_BASE = f'{API_BASE}/order'
ORDER_CREATE = ORDER_BASE
ORDER_GET = f'{ORDER_BASE}/{{order_id}}'
ORDER_RELEASE = f'{ORDER_BASE}/{{order_id}}/release'
ORDER_REFUND = f'{ORDER_BASE}/{{order_id}}/refund'
ORDER_REFUNDS = f'{ORDER_BASE}/{{order_id}}/refunds'
ORDER_EVENT_REFUND = f'{ORDER_BASE}/event/{{event_id}}/refund'
ORDER_EVENT_REFUNDS = f'{ORDER_BASE}/refunds'

# Health
HEALTH = '/health'
