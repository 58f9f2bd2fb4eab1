class CatalogError(Exception):
    """카탈로그 서비스 공통 예외. status_code 는 응답 코드로 그대로 쓰인다."""

    status_code = 500
    default_message = "요청을 처리하지 못했습니다."

    def __init__(self, message=None, field=None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def as_data(self):
        data = {"detail": self.message}
        if self.field:
            data["field"] = self.field
        return data


class ValidationError(CatalogError):
    status_code = 400
    default_message = "유효하지 않은 입력"


class AuthorizationError(CatalogError):
    status_code = 403
    default_message = "권한이 없습니다."


class NotFoundError(CatalogError):
    status_code = 404
    default_message = "대상을 찾을 수 없습니다."


class PersistenceError(CatalogError):
    # 내부 상태는 노출하지 않는다. 상세 내용은 로그로만 남김
    status_code = 500
    default_message = "저장 중 오류가 발생했습니다."
