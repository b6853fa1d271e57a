from enum import Enum

class APIError(Enum):
    # 1. 공통 에러
    INTERNAL_SERVER_ERROR = ("C001", "서버 내부 오류가 발생했습니다.", 500)
    INVALID_INPUT_VALUE  = ("C002", "입력값이 올바르지 않습니다.", 400)
    DB_ERROR = ("C003", "DB 작업 처리 중 오류가 발생하였습니다.", 500)
    INVALID_ID_FORMAT = ("C004", "ID 형식이 올바르지 않습니다.", 400)
    INVALID_PAGINATION = ("C005", "페이지 정보가 올바르지 않습니다.", 400)
    DUPLICATE_RELATION = ("C006", "이미 존재하는 관계입니다.", 409)
    STORE_UNAVAILABLE = ("C007", "데이터 저장소에 연결할 수 없습니다.", 503)
    STORE_TIMEOUT = ("C008", "데이터 저장소 응답 시간이 초과되었습니다.", 504)

    # 2. 인증(Auth) 관련
    AUTH_TOKEN_EXPIRED   = ("A001", "토큰이 만료되었습니다.", 401)
    AUTH_INVALID_TOKEN   = ("A002", "유효하지 않은 토큰입니다.", 401)

    # 3. 사용자(User) / 채널 관련
    USER_NOT_FOUND       = ("U001", "사용자를 찾을 수 없습니다.", 404)
    CHANNEL_NOT_FOUND    = ("U002", "채널을 찾을 수 없습니다.", 404)
    SUBSCRIPTION_SELF    = ("U003", "자기 자신의 채널은 구독할 수 없습니다.", 400)

    # 4. 영상(Video) 관련
    VIDEO_NOT_FOUND      = ("V001", "영상을 찾을 수 없습니다.", 404)
    VIDEO_UPLOAD_FAIL    = ("V002", "영상 업로드에 실패했습니다.", 502)
    VIDEO_DELETE_FAIL    = ("V003", "영상 파일 삭제에 실패했습니다.", 502)
    VIDEO_FORBIDDEN      = ("V004", "영상에 대한 권한이 없습니다.", 403)
    VIDEO_FILE_REQUIRED  = ("V005", "영상 파일과 썸네일이 필요합니다.", 400)

    # 5. 댓글(Comment) 관련
    COMMENT_NOT_FOUND    = ("M001", "댓글을 찾을 수 없습니다.", 404)
    COMMENT_FORBIDDEN    = ("M002", "댓글에 대한 권한이 없습니다.", 403)
    COMMENT_EMPTY        = ("M003", "댓글 내용이 비어 있습니다.", 400)

    # 6. 좋아요 대상 관련
    TWEET_NOT_FOUND      = ("T001", "트윗을 찾을 수 없습니다.", 404)

    def __init__(self, code, message, status):
        self.code = code
        self.message = message
        self.status = status
