"""UI string constants: single source of truth for the client and the server.

Must stay in sync with the keys rendered by the mobile screens.
"""

from enum import Enum


class LanguageCode(Enum):
    """Languages the UI can be displayed in."""

    EN = 'en'
    VN = 'vn'

    @property
    def display_name(self) -> str:
        return self.name


# Every key a StringTable can hold, in display order
STRING_KEYS = (
    'hello',
    'noticeBoard',
    'viewMore',
    'upcomingEvent',
    'examArchive',
    'equipmentBooking',
    'notifications',
    'all',
    'unread',
    'noUnreadNotices',
    'noNotices',
    'back',
    'placeholder',
    'academicAffairs',
    'research',
    'events',
    'general',
    'navHome',
    'navEvents',
    'navNotices',
    'navBooking',
    'navExams',
)

# Accepted spellings -> language
LANGUAGE_ALIASES = {
    'en': LanguageCode.EN,
    'vn': LanguageCode.VN,
    'vi': LanguageCode.VN,
}

DEFAULT_ENGLISH = {
    'hello': 'Hello,',
    'noticeBoard': 'NOTICE BOARD',
    'viewMore': 'View more',
    'upcomingEvent': 'UPCOMING EVENT',
    'examArchive': 'EXAM ARCHIVE',
    'equipmentBooking': 'EQUIPMENT BOOKING',
    'notifications': 'Notifications',
    'all': 'All',
    'unread': 'Unread',
    'noUnreadNotices': 'No unread notices',
    'noNotices': 'No notices',
    'back': 'Back',
    'placeholder': 'Placeholder',
    'academicAffairs': 'Academic Affairs',
    'research': 'Research',
    'events': 'Events',
    'general': 'General',
    'navHome': 'Home',
    'navEvents': 'Events',
    'navNotices': 'Notices',
    'navBooking': 'Booking',
    'navExams': 'Exams',
}

DEFAULT_VIETNAMESE = {
    'hello': 'Xin chào,',
    'noticeBoard': 'THÔNG BÁO',
    'viewMore': 'Xem thêm',
    'upcomingEvent': 'SỰ KIỆN SẮP TỚI',
    'examArchive': 'XEM TÀI LIỆU',
    'equipmentBooking': 'ĐẶT THIẾT BỊ',
    'notifications': 'Thông báo',
    'all': 'Tất cả',
    'unread': 'Chưa đọc',
    'noUnreadNotices': 'Không có thông báo chưa đọc',
    'noNotices': 'Không có thông báo',
    'back': 'Quay lại',
    'placeholder': 'Đang cập nhật',
    'academicAffairs': 'Học vụ',
    'research': 'Nghiên cứu',
    'events': 'Sự kiện',
    'general': 'Chung',
    'navHome': 'Trang chủ',
    'navEvents': 'Sự kiện',
    'navNotices': 'Thông báo',
    'navBooking': 'Đặt lịch',
    'navExams': 'Tài liệu',
}


def normalize_language(code) -> LanguageCode | None:
    """Normalize a language code.

    - Accepts LanguageCode members as-is
    - Lowercases and strips whitespace
    - Maps 'vi' to VN
    - Returns None for unknown codes
    """
    if isinstance(code, LanguageCode):
        return code
    if not isinstance(code, str):
        return None
    return LANGUAGE_ALIASES.get(code.lower().strip())


def parse_language(code) -> LanguageCode:
    """Like normalize_language, but raises ValueError for unknown codes."""
    language = normalize_language(code)
    if language is None:
        raise ValueError(
            f"Invalid language '{code}'. "
            f"Valid languages: {', '.join(sorted(LANGUAGE_ALIASES))}"
        )
    return language
