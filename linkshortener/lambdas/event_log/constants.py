# Event / error codes
METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
EVENT_LOG_READ = 'EVENT_LOG_READ'
EVENT_LOG_CLEARED = 'EVENT_LOG_CLEARED'
