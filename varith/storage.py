"""
Copy-on-write storage shared among container handles.

A handle (a Tuple, a Set, or a Matrix) points at a Shared cell.
Copying a handle only bumps the cell's count of sharers.
The first mutating access through a handle whose cell has other sharers
detaches that handle onto a private duplicate, so no other handle sees the change.
The count is guarded by a lock; the payload itself is not, so a handle
must not be mutated from two threads at once.
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

log = logging.getLogger(__name__)

T = TypeVar('T')

class Shared(Generic[T]):
	""" A payload plus the number of handles that currently refer to it. """
	def __init__(self, payload:T):
		self.payload = payload
		self._sharers = 1
		self._lock = threading.Lock()

	def share(self) -> "Shared[T]":
		with self._lock: self._sharers += 1
		return self

	def release(self):
		with self._lock: self._sharers -= 1

	def is_shared(self) -> bool:
		with self._lock: return self._sharers > 1


class CopyOnWrite(ABC):
	"""
	Mixin for value-semantic containers.
	Subclasses read through _read() and mutate only through _write().
	"""
	_cell: Shared = None

	def _attach(self, payload):
		self._cell = Shared(payload)

	def _share_from(self, other:"CopyOnWrite"):
		self._cell = other._cell.share()

	def _read(self):
		return self._cell.payload

	def _write(self):
		""" The payload, made private to this handle if it was not already. """
		cell = self._cell
		if cell.is_shared():
			log.debug("detaching %s from storage shared with other handles", type(self).__name__)
			self._cell = Shared(self._duplicate(cell.payload))
			cell.release()
		return self._cell.payload

	def _replace(self, payload):
		""" Swap in a whole new payload, leaving any other sharers with the old one. """
		self._cell.release()
		self._cell = Shared(payload)

	def _adopt(self, other:"CopyOnWrite"):
		""" Become another handle on other's storage, letting go of our own. """
		cell = self._cell
		self._share_from(other)
		cell.release()

	@abstractmethod
	def _duplicate(self, payload): raise NotImplementedError(type(self))

	def is_shared(self) -> bool:
		return self._cell.is_shared()

	def clone(self):
		""" A new handle on the same storage. Cost is independent of size. """
		twin = object.__new__(type(self))
		twin._share_from(self)
		return twin

	def __copy__(self): return self.clone()
	def __deepcopy__(self, memo): return self.clone()

	def __del__(self):
		cell = self._cell
		if cell is not None: cell.release()
