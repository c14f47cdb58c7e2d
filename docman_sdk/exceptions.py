# docman_sdk/exceptions.py


class DocmanSDKError(Exception):
    """
    Базовый класс для всех пользовательских исключений docman_sdk.
    Позволяет ловить все ошибки SDK одним блоком except DocmanSDKError.
    """

    pass


class ConfigurationError(DocmanSDKError):
    """
    Ошибка конфигурации SDK: например, ресурс не зарегистрирован в ResourceRegistry
    или для ресурса указан недопустимый размер страницы по умолчанию.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"Configuration Error: {self.message}"


class ServiceCommunicationError(DocmanSDKError):
    """
    Ошибка связи с сервисом списков записей.
    Включает URL, статус-код (если сервис ответил) и человекочитаемое сообщение.
    """

    def __init__(
        self, message: str, status_code: int | None = None, url: str | None = None
    ):
        """
        :param message: Основное сообщение об ошибке.
        :param status_code: HTTP статус-код ответа, если применимо.
        :param url: URL, при обращении к которому произошла ошибка.
        """
        self.message = message
        self.status_code = status_code
        self.url = url
        full_message = "Service Communication Error"
        if self.url:
            full_message += f" accessing {self.url}"
        if self.status_code:
            full_message += f" (Status Code: {self.status_code})"
        full_message += f": {self.message}"
        super().__init__(full_message)
