# Role: Central enum of conversation modes. The caller picks one per request and it selects the
# mode block appended to the system prompt.

from enum import Enum


class Intent(str, Enum):
    NEWS = "news"
    JOBS = "jobs"
    CONSULT = "consult"
