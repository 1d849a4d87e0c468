# Licensed to the Apache Software Foundation (ASF) under one or more
# contributor license agreements.  See the NOTICE file distributed with
# this work for additional information regarding copyright ownership.
# The ASF licenses this file to You under the Apache License, Version 2.0
# (the "License"); you may not use this file except in compliance with
# the License.  You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from cloudmetal.machine.base import Machine
from cloudmetal.machine.unix import UnixMachine
from cloudmetal.machine.windows import WindowsMachine

__all__ = [
    'Machine',
    'UnixMachine',
    'WindowsMachine',
    'machine_class_for'
]


def machine_class_for(is_windows):
    """
    Return the machine handle class suited to the machine's OS.
    """
    return WindowsMachine if is_windows else UnixMachine
