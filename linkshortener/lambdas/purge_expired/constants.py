# Diagnostic statuses
SUCCESS = 'success'
ERROR = 'error'
