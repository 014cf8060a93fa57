from prometheus_client import Counter, Gauge, Histogram

poll_duration_seconds = Histogram('poll_duration_seconds', 'Duration of a polling cycle')
poll_errors_total = Counter('poll_errors_total', 'Number of per-broadcaster poll errors')
last_poll_timestamp = Gauge('last_poll_timestamp', 'Unix timestamp of last completed poll')

notifications_sent_total = Counter('notifications_sent_total', 'Number of live notifications delivered')
notification_failures_total = Counter('notification_failures_total', 'Number of live notifications that failed to deliver')

broadcaster_live = Gauge('broadcaster_live', 'Whether a broadcaster was live at the last poll (0/1)', ['broadcaster'])
streamers_total = Gauge('streamers_total', 'Total number of broadcasters tracked')
