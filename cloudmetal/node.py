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

"""
Accessors for the node record handed to provisioners.

A node record is a plain ``dict`` owned by the caller::

    {
        'name': 'web1',
        'provisioner_options': {
            'bootstrap_options': {...},
            'is_windows': False,
        },
        'provisioner_output': {
            'provisioner_url': 'fog:AWS:AKIA...',
            'server_id': 'i-0123456789',
        },
    }
"""

from typing import Any
from typing import Dict
from typing import Optional

__all__ = [
    'get_node_name',
    'get_provisioner_options',
    'get_provisioner_output',
    'get_server_id',
    'is_windows'
]


def get_node_name(node):
    # type: (Dict[str, Any]) -> str
    return node.get('name') or '<unnamed>'


def get_provisioner_options(node):
    # type: (Dict[str, Any]) -> Dict[str, Any]
    return node.get('provisioner_options') or {}


def get_provisioner_output(node):
    # type: (Dict[str, Any]) -> Optional[Dict[str, Any]]
    return node.get('provisioner_output')


def get_server_id(node):
    # type: (Dict[str, Any]) -> Optional[str]
    output = get_provisioner_output(node)
    if not output:
        return None

    return output.get('server_id')


def is_windows(node):
    # type: (Dict[str, Any]) -> bool
    return bool(get_provisioner_options(node).get('is_windows', False))
