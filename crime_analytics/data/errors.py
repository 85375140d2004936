"""
Exceptions raised while ingesting the yearly incident batches.
"""


class MalformedSourceError(ValueError):
    """A yearly source is not row/column shaped, or rows were lost in the merge.

    Fatal: a partial ingest would skew every cross-year comparison.
    """
