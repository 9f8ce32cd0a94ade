# Event codes
STATS_SUCCESS = 'STATS_SUCCESS'
