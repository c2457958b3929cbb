"""
触觉文档库

维护按添加顺序排列的文档列表和当前选中项。
所有修改在锁内完成，并在修改完成后通过响应式状态流发布完整快照。
"""

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import reactivex as rx
from reactivex.abc import DisposableBase
from reactivex.subject import BehaviorSubject

from haptic_toolbox.core.ahap.ahap_models import LibraryIndexError
from haptic_toolbox.core.haptic_document import DEFAULT_DOCUMENT_NAME, HapticDocument
from haptic_toolbox.models import LibraryEventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LibraryState:
    """库状态快照"""
    documents: Tuple[HapticDocument, ...] = ()
    active_index: Optional[int] = None
    last_event: Optional[LibraryEventType] = None

    @property
    def active_document(self) -> Optional[HapticDocument]:
        if self.active_index is None:
            return None
        return self.documents[self.active_index]


class HapticLibrary:
    """触觉文档库

    状态由 (documents, active_index) 构成，active_index 要么为None，要么是有效索引
    """

    def __init__(self, default_document_name: str = DEFAULT_DOCUMENT_NAME) -> None:
        super().__init__()
        self.default_document_name = default_document_name
        self._documents: List[HapticDocument] = []
        self._active_index: Optional[int] = None
        self._lock = threading.RLock()
        self._state_subject: BehaviorSubject[LibraryState] = BehaviorSubject(LibraryState())

    # ------------------------------------------------------------------
    # 只读访问
    # ------------------------------------------------------------------

    @property
    def documents(self) -> Tuple[HapticDocument, ...]:
        """获取所有文档（只读）"""
        with self._lock:
            return tuple(self._documents)

    @property
    def active_index(self) -> Optional[int]:
        with self._lock:
            return self._active_index

    @property
    def active_document(self) -> Optional[HapticDocument]:
        """当前选中的文档"""
        with self._lock:
            if self._active_index is None:
                return None
            return self._documents[self._active_index]

    @property
    def state(self) -> LibraryState:
        """当前状态快照"""
        with self._lock:
            return LibraryState(documents=tuple(self._documents), active_index=self._active_index)

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def get(self, index: int) -> HapticDocument:
        """根据索引获取文档

        Raises:
            LibraryIndexError: 索引越界
        """
        with self._lock:
            self._check_index(index)
            return self._documents[index]

    def index_of(self, document_id: uuid.UUID) -> Optional[int]:
        """根据文档ID查找索引"""
        with self._lock:
            for index, document in enumerate(self._documents):
                if document.id == document_id:
                    return index
            return None

    # ------------------------------------------------------------------
    # 状态变更
    # ------------------------------------------------------------------

    def add(self, document: HapticDocument) -> int:
        """追加文档并选中

        Args:
            document: 要添加的文档

        Returns:
            int: 新文档的索引
        """
        with self._lock:
            self._documents.append(document)
            self._active_index = len(self._documents) - 1
            logger.info(f"Added document '{document.name}' at index {self._active_index}")
            self._publish(LibraryEventType.ADDED)
            return self._active_index

    def add_from_text(self, content: str, name: Optional[str] = None) -> HapticDocument:
        """从文本创建文档并添加"""
        document = HapticDocument.create(name=name, content=content, default_name=self.default_document_name)
        self.add(document)
        return document

    def remove(self, index: int) -> HapticDocument:
        """删除指定索引的文档

        删除选中项时选中同一位置的下一项（位于末尾时选中新的末项）；
        删除选中项之前的项时选中索引减一，继续指向同一文档。

        Args:
            index: 要删除的索引

        Returns:
            HapticDocument: 被删除的文档

        Raises:
            LibraryIndexError: 索引越界
        """
        with self._lock:
            self._check_index(index)
            removed = self._documents.pop(index)

            if self._active_index is not None:
                if self._active_index == index:
                    if not self._documents:
                        self._active_index = None
                    else:
                        self._active_index = min(index, len(self._documents) - 1)
                elif self._active_index > index:
                    self._active_index -= 1

            logger.info(f"Removed document '{removed.name}' from index {index}, active index now {self._active_index}")
            self._publish(LibraryEventType.REMOVED)
            return removed

    def select(self, index: int) -> HapticDocument:
        """选中指定索引的文档

        Raises:
            LibraryIndexError: 索引越界
        """
        with self._lock:
            self._check_index(index)
            self._active_index = index
            self._publish(LibraryEventType.SELECTED)
            return self._documents[index]

    def clear_all(self) -> None:
        """清空所有文档"""
        with self._lock:
            count = len(self._documents)
            self._documents.clear()
            self._active_index = None
            logger.info(f"Cleared {count} documents")
            self._publish(LibraryEventType.CLEARED)

    def update_document(self, index: int, transform: Callable[[HapticDocument], HapticDocument]) -> HapticDocument:
        """用变换函数替换指定索引的文档

        Args:
            index: 文档索引
            transform: 接收旧文档、返回新文档的函数

        Returns:
            HapticDocument: 替换后的文档

        Raises:
            LibraryIndexError: 索引越界
        """
        with self._lock:
            self._check_index(index)
            updated = transform(self._documents[index])
            self._documents[index] = updated
            self._publish(LibraryEventType.UPDATED)
            return updated

    def rename(self, index: int, name: str) -> HapticDocument:
        """重命名指定索引的文档"""
        return self.update_document(index, lambda document: document.rename(name))

    def update_active_content(self, content: str) -> Optional[HapticDocument]:
        """更新选中文档的内容，没有选中项时不做任何修改"""
        with self._lock:
            if self._active_index is None:
                logger.debug("No active document to update")
                return None
            return self.update_document(self._active_index, lambda document: document.update_content(content))

    # ------------------------------------------------------------------
    # 订阅
    # ------------------------------------------------------------------

    def observe(self) -> rx.Observable[LibraryState]:
        """状态流，订阅时立即收到当前状态"""
        return self._state_subject

    def subscribe(self, on_next: Callable[[LibraryState], None]) -> DisposableBase:
        """订阅状态变化

        订阅者回调抛出的异常只记录日志，不影响其他订阅者，也不会让已完成的修改报错
        """
        def guarded(state: LibraryState) -> None:
            try:
                on_next(state)
            except Exception as e:
                logger.error(f"Library state subscriber failed: {e}")

        return self._state_subject.subscribe(
            on_next=guarded,
            on_error=lambda e: logger.error(f"Library state stream error: {e}"),
        )

    def dispose(self) -> None:
        """结束状态流"""
        self._state_subject.on_completed()

    def _publish(self, event: LibraryEventType) -> None:
        state = LibraryState(
            documents=tuple(self._documents),
            active_index=self._active_index,
            last_event=event,
        )
        try:
            self._state_subject.on_next(state)
        except Exception as e:
            # 通过 observe() 直接订阅的观察者出错时，修改本身已经完成
            logger.error(f"Error publishing library state ({event.value}): {e}")

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._documents):
            raise LibraryIndexError(index, len(self._documents))
