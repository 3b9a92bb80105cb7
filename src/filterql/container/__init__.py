# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Minimal bean container backing the generated registration modules."""

from filterql.container.bean import bean, primary
from filterql.container.container import Container
from filterql.container.exceptions import BeanCreationException, NoSuchBeanError, NoUniqueBeanError
from filterql.container.stereotypes import component, configuration, rest_controller

__all__ = [
    "BeanCreationException",
    "Container",
    "NoSuchBeanError",
    "NoUniqueBeanError",
    "bean",
    "component",
    "configuration",
    "primary",
    "rest_controller",
]
