"""Task store with write-through JSON persistence."""

import logging
from threading import Lock
from typing import List, Optional

from ..config import Settings
from ..errors import NotFoundError, PersistenceError, ValidationError
from ..models.task import Task, TaskStatus
from ..schemas import TaskCreate, TaskUpdate
from .persistence import TaskFileStorage

logger = logging.getLogger(__name__)


def _parse_status(value: str) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status '{value}'. Use: {TaskStatus.allowed()}") from None


class TaskStore:
    """In-memory task collection mirrored to a JSON file.

    A single lock guards the collection and the ID counter. Every operation
    holds it for its full duration, including the snapshot write, so all
    access is serialized. A failed write does not roll back the in-memory
    change.
    """

    def __init__(self, storage: TaskFileStorage):
        """Initialize the task store.

        Args:
            storage: Snapshot storage used for load and write-through
        """
        self._storage = storage
        self._tasks: List[Task] = []
        self._next_id = 1
        self._lock = Lock()

    @property
    def next_id(self) -> int:
        """ID the next created task will receive."""
        with self._lock:
            return self._next_id

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def load(self) -> int:
        """Replace the collection with the persisted snapshot.

        The counter becomes one past the largest numeric ID on disk;
        non-numeric IDs are ignored.

        Returns:
            Number of tasks loaded

        Raises:
            PersistenceError: If the snapshot cannot be read
        """
        tasks = self._storage.load()

        with self._lock:
            self._tasks = tasks
            numeric_ids = [n for n in (task.numeric_id() for task in tasks) if n is not None]
            self._next_id = max(numeric_ids, default=0) + 1

            logger.info(f"Loaded {len(tasks)} tasks, next ID is {self._next_id}")
            return len(tasks)

    def list_tasks(self) -> List[Task]:
        """Return copies of every task in storage order."""
        with self._lock:
            return [task.model_copy() for task in self._tasks]

    def create_task(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            task_data: Task creation data

        Returns:
            Created task with its assigned ID

        Raises:
            ValidationError: If the title is empty or the status is unknown
            PersistenceError: If the snapshot write fails
        """
        if not task_data.title:
            raise ValidationError("Title is required")

        status = TaskStatus.TODO
        if task_data.status:
            status = _parse_status(task_data.status)

        with self._lock:
            task = Task(
                id=str(self._next_id),
                title=task_data.title,
                description=task_data.description or "",
                status=status,
            )
            self._next_id += 1
            self._tasks.append(task)

            self._save()
            logger.info(f"Created task {task.id}: {task.title}")
            return task.model_copy()

    def update_task(self, task_id: str, task_data: TaskUpdate) -> Task:
        """Update a task in place.

        Only fields that are supplied and non-empty are applied.

        Args:
            task_id: Task ID
            task_data: Task update data

        Returns:
            Updated task

        Raises:
            NotFoundError: If no task has this ID
            ValidationError: If the status is unknown; the task is left unchanged
            PersistenceError: If the snapshot write fails
        """
        with self._lock:
            task = self._find(task_id)

            status: Optional[TaskStatus] = None
            if task_data.status:
                status = _parse_status(task_data.status)

            if task_data.title:
                task.title = task_data.title
            if task_data.description:
                task.description = task_data.description
            if status is not None:
                task.status = status

            self._save()
            logger.info(f"Updated task {task_id}")
            return task.model_copy()

    def delete_task(self, task_id: str) -> None:
        """Delete a task, keeping the order of the remaining ones.

        Raises:
            NotFoundError: If no task has this ID
            PersistenceError: If the snapshot write fails
        """
        with self._lock:
            task = self._find(task_id)
            self._tasks.remove(task)

            self._save()
            logger.info(f"Deleted task {task_id}")

    def _find(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(f"Task {task_id} not found")

    def _save(self) -> None:
        # Caller holds the lock.
        self._storage.save(self._tasks)


def initialize_task_store(settings: Settings) -> TaskStore:
    """Build the task store and load the persisted snapshot.

    A failed load is logged and the store starts empty.

    Args:
        settings: Application settings

    Returns:
        Initialized task store
    """
    store = TaskStore(TaskFileStorage(settings.data_file))

    try:
        store.load()
    except PersistenceError as e:
        logger.warning(f"Failed to load tasks from disk: {e}")

    return store
