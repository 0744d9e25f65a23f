"""
Service context extraction for logging.

Identifies the running service instance so log lines from several
replicas can be told apart.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'library-rental')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    instance_id = os.getenv('HOSTNAME') or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance_id}'
