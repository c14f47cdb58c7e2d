# docman_sdk/frontend/exceptions.py
from docman_sdk.exceptions import DocmanSDKError


class FrontendError(DocmanSDKError):
    """Базовый класс для ошибок UI-слоя списков."""
    pass


class RenderingError(FrontendError):
    """Ошибка во время рендеринга шаблона или подготовки контекста."""
    pass
