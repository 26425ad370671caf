import pytest
from exactlin import RationalMatrix, RationalNumber


@pytest.fixture
def system_3x3():
    """Provide the 3x3 system with solution x = (1, -1, -2)."""
    matrix = RationalMatrix([[1, -1, -1], [2, -1, -1], [2, 2, 1]])
    rhs = RationalMatrix([[4], [5], [-2]])
    return matrix, rhs


@pytest.fixture
def matrix_det_49():
    """Provide an invertible 3x3 matrix with determinant 49."""
    return RationalMatrix([[2, -3, 1], [2, 0, -1], [1, 4, 5]])


@pytest.fixture
def hilbert_4():
    """Provide the 4x4 Hilbert matrix H[i][j] = 1/(i+j+1)."""
    return RationalMatrix([[RationalNumber(1, i + j + 1) for j in range(4)] for i in range(4)])


@pytest.fixture(params=[1, 2, 3, 5])
def size(request: pytest.FixtureRequest) -> int:
    """Provide matrix sizes for size-independent properties."""
    return request.param
