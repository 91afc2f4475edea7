from prometheus_client import Counter, Histogram, generate_latest
from fastapi import Response

# Входящие запросы к порталу
http_requests_total = Counter(
    'portal_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'portal_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Исходящие вызовы бэкенда
api_calls_total = Counter(
    'portal_api_calls_total',
    'Total backend API calls',
    ['endpoint', 'outcome']
)

api_call_duration_seconds = Histogram(
    'portal_api_call_duration_seconds',
    'Backend API call duration in seconds',
    ['endpoint']
)

notifications_total = Counter(
    'portal_notifications_total',
    'Notifications shown to the user',
    ['kind']
)

def metrics_endpoint():
    """Endpoint для Prometheus метрик"""
    return Response(content=generate_latest(), media_type="text/plain")
