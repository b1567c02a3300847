"""
recordspine - a minimal record-to-row persistence layer.

    from recordspine import Record

    class Student(Record):
        table_name = "students"
        attribute_names = ("id", "name", "created_at", "updated_at")
"""

__version__ = "0.1.0"

from recordspine.core import *  # noqa
from recordspine.core import __all__  # noqa
