import os
import tempfile

from simple_logger import Slogger

# keep test runs out of the application log
Slogger.configure(os.path.join(tempfile.gettempdir(), "northwind_admin_tests.log"), "DEBUG")
