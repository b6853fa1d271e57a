"""
Document Store package
MongoDB 접근 계층 (타임아웃/에러 변환 포함)
"""

from common.store.document_store import DocumentStore, get_document_store

__all__ = [
    'DocumentStore',
    'get_document_store'
]
