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
Transports used to reach provisioned machines.
"""

from cloudmetal.transport.base import ExecutionResult
from cloudmetal.transport.base import Transport
from cloudmetal.types import TransportError

__all__ = [
    'ExecutionResult',
    'Transport',
    'TransportType',
    'get_transport'
]


class TransportType(object):
    SSH = 'ssh'
    WINRM = 'winrm'


def get_transport(transport_type, **kwargs):
    """
    Instantiate a transport.

    :param transport_type: One of the :class:`TransportType` values.
    :type transport_type: ``str``

    :param kwargs: Passed to the transport constructor.

    :rtype: :class:`Transport`
    """
    if transport_type == TransportType.SSH:
        from cloudmetal.transport.ssh import SSHTransport
        return SSHTransport(**kwargs)

    if transport_type == TransportType.WINRM:
        raise TransportError('WinRM transport is not supported yet, '
                             'use SSH for Windows machines')

    raise TransportError('Unknown transport: %s' % (transport_type))
