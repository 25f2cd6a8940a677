"""
Waterfall - Fluent control flow for chains of guarded steps

Waterfall replaces nested conditionals with a linear chain of steps:
- Steps run in order and accumulate results in the outflow
- Guards may dam the flow; every later step is then skipped
- Failure handlers (on_dam) run only once the flow is dammed
- Flows embed other flows and import selected results from them

Example:
    from waterfall import Flow

    flow = (Flow({'email': 'ada@example.com'})
        .when_truthy(lambda o: o.email)
        .dam("email is required")
        .chain(lambda o: o.email.split('@')[0], 'login')
        .on_dam(lambda payload, o: print(payload)))

    print(flow.is_open())         # True
    print(flow.outflow['login'])  # ada
"""

import logging

__version__ = "1.0.0"
__author__ = "Waterfall Contributors"

from .config import FlowConfig, configure, get_config, reset_config
from .errors import (
    ConfigError,
    FlowTypeError,
    ImportSpecError,
    IncorrectDamArgumentError,
    WaterfallError,
)
from .flow import Flow
from .middleware import LoggingMiddleware, Middleware, TimingMiddleware
from .outflow import MISSING, Outflow
from .result import Result
from .state import FlowState, FlowStatus, falsy, truthy
from .step import Step, StepCall, StepKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Flow',
    'Outflow',
    'MISSING',
    'FlowState',
    'FlowStatus',
    'truthy',
    'falsy',
    'Result',
    'Step',
    'StepCall',
    'StepKind',
    'Middleware',
    'LoggingMiddleware',
    'TimingMiddleware',
    'FlowConfig',
    'configure',
    'get_config',
    'reset_config',
    'WaterfallError',
    'IncorrectDamArgumentError',
    'FlowTypeError',
    'ImportSpecError',
    'ConfigError',
]
