"""Gunicorn configuration for the HallBook reservation service."""

# Server socket
bind = '0.0.0.0:8000'

# Threaded workers; SQLite serializes writers with BEGIN IMMEDIATE
workers = 2
threads = 8
worker_class = 'gthread'

# Slow classifier calls are bounded by CLASSIFIER_TIMEOUT
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = 'logs/gunicorn-access.log'
errorlog = 'logs/gunicorn-error.log'
loglevel = 'info'
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

# Process naming
proc_name = 'hallbook'

# Worker recycling
max_requests = 2000
max_requests_jitter = 100

# Request limits
limit_request_line = 4094
limit_request_fields = 50
