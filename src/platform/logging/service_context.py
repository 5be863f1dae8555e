"""
Service identification for log lines.

Every record carries `<service>@<env>:<instance>` so logs from several API
replicas can be told apart once they are shipped to a shared sink.
"""

import os
import socket
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cinechain-api')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers get a hostname per replica; locally the PID is more useful
    if os.getenv('KUBERNETES_SERVICE_HOST') or os.path.exists('/.dockerenv'):
        instance = socket.gethostname()[:12]
    else:
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
