from django.http import JsonResponse
from django.db import connections
from django.db.utils import OperationalError
import time
from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _db_check(alias='default'):
    started = time.time()
    try:
        conn = connections[alias]
        with conn.cursor() as cursor:
            cursor.execute('SELECT 1')
        latency = round((time.time() - started) * 1000, 2)
        logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
        return {'status': 'ok', 'latency_ms': latency}
    except OperationalError as e:
        # Expected operational DB issues (connection refused, etc.)
        logger.warning('Database health check encountered operational error', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}
    except Exception as e:  # driver bugs and mocked failures surface as a failed check
        logger.error('Database health check failed unexpectedly', alias=alias, error=str(e), exception=e.__class__.__name__)
        return {'status': 'fail', 'error': str(e), 'exception': e.__class__.__name__}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: the backing store answers a trivial query."""
    checks = {'database': _db_check()}
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse({'status': overall_status, 'checks': checks}, status=http_status)


def not_found(request, exception=None):
    """``handler404``: unknown routes answer in the API's JSON error shape."""
    logger.info('Unknown route requested', path=request.path)
    return JsonResponse(
        {'error': 'Resource not found', 'code': 'NOT_FOUND', 'status': 404},
        status=404,
    )


def server_error(request):
    """``handler500`` for failures raised outside the DRF views."""
    logger.error('Server error outside API views', path=request.path)
    return JsonResponse(
        {'error': 'Something went wrong', 'code': 'SERVER_ERROR', 'status': 500},
        status=500,
    )
