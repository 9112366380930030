# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Route groups of the tour, one per HTTP feature.

ALL_GROUPS is the composition order used by TourServer: the first route in
the combined list that matches handles the request.
"""

from .entity import entity
from .forms import forms
from .hello import hello
from .headers import headers
from .jsonbody import jsonbody
from .params import params
from .wsecho import wsecho

ALL_GROUPS = (hello, params, headers, entity, jsonbody, forms, wsecho)

__all__ = [
    "ALL_GROUPS",
    "entity",
    "forms",
    "headers",
    "hello",
    "jsonbody",
    "params",
    "wsecho",
]
