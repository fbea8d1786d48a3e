__all__ = [
    "__project__",
    "__title__",
    "__author__",
    "__copyright__",
    "__license__",
    "__version__",
    "__mail__",
    "__maintainer__",
    "__status__",
]

__project__ = "PyDataDriven"
__title__ = "pydatadriven"
__author__ = "PyDataDriven contributors"
__copyright__ = "Copyright 2024-2026, PyDataDriven contributors"
__license__ = "MIT"
__version__ = "0.3.0"
__mail__ = "pydatadriven.info@gmail.com"
__maintainer__ = __author__
__status__ = "Beta"
