"""Contains the name for the logger of dualnum modules.

``dualnum`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``DEBUG``: Details of the linear-algebra and implicit-derivative routines, such as
    matrix sizes, the eigen-solver in use, and Newton steps.
* ``WARNING``: An indication that a numerical routine produced a result which may
    require attention, e.g. an eigenvalue iteration that did not converge.

Errors are raised as exceptions and are never only logged. By default, only messages
of level ``WARNING`` are displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``dualnum.logger.dualnum_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "dualnum"
dualnum_logger = logging.getLogger(logger_name)
