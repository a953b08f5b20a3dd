"""Hostname blacklister - 반복 타임아웃 hostname 금지 목록 관리"""

__version__ = "1.0.0"
