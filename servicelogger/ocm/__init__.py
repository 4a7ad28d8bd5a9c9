"""OCM service log API access."""

from servicelogger.ocm.client import OCMClient, send_service_log
from servicelogger.ocm.connection import OCMConnection, establish_connection

__all__ = ["OCMClient", "OCMConnection", "establish_connection", "send_service_log"]
