# docman_sdk/frontend/config.py

# Шаблоны списка
LIST_VIEW_TEMPLATE = "list_view.html"

# Имя события HTMX, по которому клиент показывает toast
TOAST_EVENT_NAME = "showToast"

# Максимальное число одновременно хранимых ListView (вытесняются самые давние)
DEFAULT_MAX_VIEWS = 500
