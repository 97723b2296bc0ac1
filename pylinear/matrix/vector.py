"""
Real vectors.

RealVector is the abstract base: subclasses provide storage through a
handful of primitive reads and writes, everything else (arithmetic,
norms, iteration) is built on top of those primitives. ArrayRealVector
stores its entries in a 1-D float64 NumPy array and overrides the
operations that benefit from vectorization.

Any object with get_dimension() and get_entry(i) (see VectorLike) can be
used where a vector is only read.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pylinear.core.exceptions import (
    MathArithmeticError,
    NotPositiveError,
    ValidationError,
)
from pylinear.core.protocols import VectorLike
from pylinear.core.validation import check_dimension, check_index, check_not_null

if TYPE_CHECKING:
    from pylinear.matrix.dense import RealMatrix


def vector_to_array(v: Any, name: str = "vector") -> NDArray[np.float64]:
    """
    Read any vector into a fresh 1-D float64 array.

    Accepts RealVector instances, any VectorLike implementation, 1-D
    ndarrays and plain sequences of numbers. The result never aliases
    the caller's storage.

    Raises:
        NullArgumentError: If v is None
        ValidationError: If v cannot be read as a 1-D numeric vector
    """
    check_not_null(v, name)
    if isinstance(v, RealVector):
        return v.to_array()
    if isinstance(v, VectorLike):
        return np.array(
            [v.get_entry(i) for i in range(v.get_dimension())],
            dtype=np.float64,
        )
    try:
        result = np.array(v, dtype=np.float64)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to vector: {e}") from e
    if result.ndim != 1:
        raise ValidationError(
            f"{name}: expected 1D data, got {result.ndim}D with shape {result.shape}"
        )
    return result


class VectorEntry:
    """
    One (index, value) position of a vector, yielded by iteration.

    The value is read live from the vector; set_value writes through.
    """

    __slots__ = ('_vector', '_index')

    def __init__(self, vector: RealVector, index: int):
        self._vector = vector
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @property
    def value(self) -> float:
        return self._vector.get_entry(self._index)

    def set_value(self, value: float) -> None:
        self._vector.set_entry(self._index, value)

    def __iter__(self) -> Iterator[Any]:
        # allows ``for i, x in vector`` style unpacking
        yield self._index
        yield self.value

    def __repr__(self) -> str:
        return f"VectorEntry(index={self._index}, value={self.value!r})"


class RealVector(ABC):
    """
    Abstract real vector.

    Subclasses implement the primitive reads (get_dimension, get_entry,
    get_sub_vector, copy) and writes (set_entry, set_sub_vector).
    """

    # === Primitives ===

    @abstractmethod
    def get_dimension(self) -> int:
        """Number of entries."""

    @abstractmethod
    def get_entry(self, index: int) -> float:
        """
        Entry at a zero-based index.

        Raises:
            OutOfRangeError: If the index is not valid
        """

    @abstractmethod
    def set_entry(self, index: int, value: float) -> None:
        """
        Set the entry at a zero-based index.

        Raises:
            OutOfRangeError: If the index is not valid
        """

    @abstractmethod
    def get_sub_vector(self, index: int, n: int) -> RealVector:
        """
        Extract n consecutive entries starting at index.

        Raises:
            OutOfRangeError: If index or index + n - 1 is not valid
            NotPositiveError: If n < 0
        """

    @abstractmethod
    def set_sub_vector(self, index: int, v: Any) -> None:
        """
        Overwrite entries starting at index with the entries of v.

        Raises:
            OutOfRangeError: If the sub-vector does not fit
        """

    @abstractmethod
    def copy(self) -> RealVector:
        """Deep copy."""

    # === Reads built on the primitives ===

    def to_array(self) -> NDArray[np.float64]:
        """Entries as a new 1-D array."""
        return np.array(
            [self.get_entry(i) for i in range(self.get_dimension())],
            dtype=np.float64,
        )

    def check_vector_index(self, index: int) -> None:
        check_index(index, self.get_dimension())

    def check_vector_dimensions(self, v: Any) -> None:
        other = v.get_dimension() if isinstance(v, VectorLike) else len(v)
        check_dimension(self.get_dimension(), other, "vector dimension")

    def is_nan(self) -> bool:
        return bool(np.any(np.isnan(self.to_array())))

    def is_infinite(self) -> bool:
        """True if an entry is infinite and none is NaN."""
        data = self.to_array()
        return bool(not np.any(np.isnan(data)) and np.any(np.isinf(data)))

    def append(self, v: Any) -> RealVector:
        """New vector made of this vector followed by v (vector or scalar)."""
        if np.isscalar(v):
            tail = np.array([v], dtype=np.float64)
        else:
            tail = vector_to_array(v)
        return ArrayRealVector(np.concatenate([self.to_array(), tail]), copy=False)

    def add(self, v: Any) -> RealVector:
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        return ArrayRealVector(self.to_array() + other, copy=False)

    def subtract(self, v: Any) -> RealVector:
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        return ArrayRealVector(self.to_array() - other, copy=False)

    def ebe_multiply(self, v: Any) -> RealVector:
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        return ArrayRealVector(self.to_array() * other, copy=False)

    def ebe_divide(self, v: Any) -> RealVector:
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        with np.errstate(divide='ignore', invalid='ignore'):
            return ArrayRealVector(self.to_array() / other, copy=False)

    def map_add(self, d: float) -> RealVector:
        return ArrayRealVector(self.to_array() + d, copy=False)

    def map_subtract(self, d: float) -> RealVector:
        return ArrayRealVector(self.to_array() - d, copy=False)

    def map_multiply(self, d: float) -> RealVector:
        return ArrayRealVector(self.to_array() * d, copy=False)

    def map_divide(self, d: float) -> RealVector:
        with np.errstate(divide='ignore', invalid='ignore'):
            return ArrayRealVector(self.to_array() / d, copy=False)

    def map(self, function: Callable[[float], float]) -> RealVector:
        """New vector with function applied to every entry."""
        return ArrayRealVector([function(x) for x in self.to_array()], copy=False)

    def combine(self, a: float, b: float, y: Any) -> RealVector:
        """New vector a * self + b * y."""
        other = vector_to_array(y)
        self.check_vector_dimensions(other)
        return ArrayRealVector(a * self.to_array() + b * other, copy=False)

    def dot_product(self, v: Any) -> float:
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        return float(np.dot(self.to_array(), other))

    def cosine(self, v: Any) -> float:
        """
        Cosine of the angle between this vector and v.

        Raises:
            MathArithmeticError: If either vector has zero norm
        """
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        norm = self.get_norm()
        other_norm = float(np.linalg.norm(other))
        if norm == 0 or other_norm == 0:
            raise MathArithmeticError("zero norm")
        return self.dot_product(other) / (norm * other_norm)

    def get_norm(self) -> float:
        """L2 norm."""
        return float(np.linalg.norm(self.to_array()))

    def get_l1_norm(self) -> float:
        return float(np.sum(np.abs(self.to_array())))

    def get_linf_norm(self) -> float:
        data = self.to_array()
        return float(np.max(np.abs(data))) if data.size else 0.0

    def get_distance(self, v: Any) -> float:
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        return float(np.linalg.norm(self.to_array() - other))

    def get_l1_distance(self, v: Any) -> float:
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        return float(np.sum(np.abs(self.to_array() - other)))

    def get_linf_distance(self, v: Any) -> float:
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        diff = np.abs(self.to_array() - other)
        return float(np.max(diff)) if diff.size else 0.0

    def get_min_index(self) -> int:
        """Index of the smallest entry, -1 for an empty (or all-NaN) vector."""
        data = self.to_array()
        if data.size == 0 or np.all(np.isnan(data)):
            return -1
        return int(np.nanargmin(data))

    def get_min_value(self) -> float:
        index = self.get_min_index()
        return float('nan') if index < 0 else self.get_entry(index)

    def get_max_index(self) -> int:
        """Index of the largest entry, -1 for an empty (or all-NaN) vector."""
        data = self.to_array()
        if data.size == 0 or np.all(np.isnan(data)):
            return -1
        return int(np.nanargmax(data))

    def get_max_value(self) -> float:
        index = self.get_max_index()
        return float('nan') if index < 0 else self.get_entry(index)

    def unit_vector(self) -> RealVector:
        """
        New vector with the same direction and unit norm.

        Raises:
            MathArithmeticError: If the norm is zero
        """
        norm = self.get_norm()
        if norm == 0:
            raise MathArithmeticError("zero norm")
        return ArrayRealVector(self.to_array() / norm, copy=False)

    def projection(self, v: Any) -> RealVector:
        """
        Projection of this vector onto v.

        Raises:
            MathArithmeticError: If v has zero norm
        """
        other = vector_to_array(v)
        self.check_vector_dimensions(other)
        norm2 = float(np.dot(other, other))
        if norm2 == 0:
            raise MathArithmeticError("zero norm")
        return ArrayRealVector(other * (self.dot_product(other) / norm2), copy=False)

    def outer_product(self, v: Any) -> RealMatrix:
        from pylinear.matrix.dense import RealMatrix

        other = vector_to_array(v)
        if self.get_dimension() == 0 or other.size == 0:
            raise ValidationError("outer product of an empty vector has no entries")
        return RealMatrix(np.outer(self.to_array(), other), copy=False)

    # === Writes built on the primitives ===

    def add_to_entry(self, index: int, increment: float) -> None:
        self.set_entry(index, self.get_entry(index) + increment)

    def set(self, value: float) -> None:
        """Set every entry to value."""
        for i in range(self.get_dimension()):
            self.set_entry(i, value)

    def map_to_self(self, function: Callable[[float], float]) -> RealVector:
        for i in range(self.get_dimension()):
            self.set_entry(i, function(self.get_entry(i)))
        return self

    def map_add_to_self(self, d: float) -> RealVector:
        return self.map_to_self(lambda x: x + d)

    def map_subtract_to_self(self, d: float) -> RealVector:
        return self.map_to_self(lambda x: x - d)

    def map_multiply_to_self(self, d: float) -> RealVector:
        return self.map_to_self(lambda x: x * d)

    def map_divide_to_self(self, d: float) -> RealVector:
        return self.map_to_self(lambda x: x / d)

    def combine_to_self(self, a: float, b: float, y: Any) -> RealVector:
        other = vector_to_array(y)
        self.check_vector_dimensions(other)
        for i in range(self.get_dimension()):
            self.set_entry(i, a * self.get_entry(i) + b * other[i])
        return self

    def unitize(self) -> None:
        """
        Scale this vector to unit norm in place.

        Raises:
            MathArithmeticError: If the norm is zero
        """
        norm = self.get_norm()
        if norm == 0:
            raise MathArithmeticError("zero norm")
        self.map_divide_to_self(norm)

    # === Python protocol ===

    def __iter__(self) -> Iterator[VectorEntry]:
        for i in range(self.get_dimension()):
            yield VectorEntry(self, i)

    def __len__(self) -> int:
        return self.get_dimension()


class ArrayRealVector(RealVector):
    """
    Vector backed by a 1-D float64 array.

    Construction:
        ArrayRealVector([1.0, 2.0, 3.0])      # copy of a sequence
        ArrayRealVector(arr, copy=False)      # wrap a float64 ndarray
        ArrayRealVector(other_vector)         # copy of any VectorLike
        ArrayRealVector.zeros(5)
    """

    def __init__(self, data: Any = (), copy: bool = True):
        check_not_null(data, "data")
        if (
            not copy
            and isinstance(data, np.ndarray)
            and data.dtype == np.float64
            and data.ndim == 1
        ):
            self._data = data
        else:
            self._data = vector_to_array(data, "data")

    @classmethod
    def zeros(cls, size: int) -> ArrayRealVector:
        if size < 0:
            raise NotPositiveError(size, f"invalid vector dimension: {size}")
        return cls(np.zeros(size, dtype=np.float64), copy=False)

    # === Primitives ===

    def get_dimension(self) -> int:
        return int(self._data.shape[0])

    def get_entry(self, index: int) -> float:
        self.check_vector_index(index)
        return float(self._data[index])

    def set_entry(self, index: int, value: float) -> None:
        self.check_vector_index(index)
        self._data[index] = value

    def add_to_entry(self, index: int, increment: float) -> None:
        self.check_vector_index(index)
        self._data[index] += increment

    def get_sub_vector(self, index: int, n: int) -> ArrayRealVector:
        if n < 0:
            raise NotPositiveError(n, f"number of elements should be positive ({n})")
        self.check_vector_index(index)
        if n > 0:
            self.check_vector_index(index + n - 1)
        return ArrayRealVector(self._data[index:index + n].copy(), copy=False)

    def set_sub_vector(self, index: int, v: Any) -> None:
        values = vector_to_array(v)
        self.check_vector_index(index)
        if values.size > 0:
            self.check_vector_index(index + values.size - 1)
        self._data[index:index + values.size] = values

    def copy(self) -> ArrayRealVector:
        return ArrayRealVector(self._data.copy(), copy=False)

    def to_array(self) -> NDArray[np.float64]:
        return self._data.copy()

    def get_data_ref(self) -> NDArray[np.float64]:
        """Backing array (no copy)."""
        return self._data

    # === Vectorized writes ===

    def set(self, value: float) -> None:
        self._data[:] = value

    def map_add_to_self(self, d: float) -> ArrayRealVector:
        self._data += d
        return self

    def map_subtract_to_self(self, d: float) -> ArrayRealVector:
        self._data -= d
        return self

    def map_multiply_to_self(self, d: float) -> ArrayRealVector:
        self._data *= d
        return self

    def map_divide_to_self(self, d: float) -> ArrayRealVector:
        with np.errstate(divide='ignore', invalid='ignore'):
            self._data /= d
        return self

    # === Python protocol ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RealVector):
            return NotImplemented
        if other.get_dimension() != self.get_dimension():
            return False
        return bool(np.array_equal(self._data, other.to_array()))

    __hash__ = None  # mutable

    def __array__(self, dtype=None, copy=None) -> NDArray:
        return np.array(self._data, dtype=dtype)

    def __repr__(self) -> str:
        return f"ArrayRealVector({self._data.tolist()!r})"
