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

from typing import Optional

__all__ = [
    "CloudMetalError",
    "ProvisionerMismatchError",
    "MachineNotCreatedError",
    "MachineNotFoundError",
    "TransportError",
    "ExecutionError"
]


class CloudMetalError(Exception):
    """The base class for other cloudmetal exceptions"""

    def __init__(self, value, provisioner=None):
        # type: (str, Optional[object]) -> None
        super(CloudMetalError, self).__init__(value)
        self.value = value
        self.provisioner = provisioner

    def __str__(self):
        return self.__repr__()

    def __repr__(self):
        return ("<%s in " % (self.__class__.__name__) +
                repr(self.provisioner) +
                " " +
                repr(self.value) + ">")


class ProvisionerMismatchError(CloudMetalError):
    """
    Raised when a node which has already been provisioned by one provisioner
    is handed to a different one.
    """

    def __init__(self, node_name, expected, actual, provisioner=None):
        # type: (str, str, str, Optional[object]) -> None
        self.node_name = node_name
        self.expected = expected
        self.actual = actual
        value = ('Switching providers for a machine is not currently '
                 'supported! Machine %s is on %s, not %s. Delete the machine '
                 'and then re-create it on the new provider.'
                 % (node_name, actual, expected))
        super(ProvisionerMismatchError, self).__init__(
            value=value, provisioner=provisioner)


class MachineNotCreatedError(CloudMetalError):
    """
    Raised when an operation needs an existing server, but none has been
    recorded for the node.
    """

    def __init__(self, node_name, provisioner=None):
        # type: (str, Optional[object]) -> None
        self.node_name = node_name
        value = 'Server for node %s has not been created!' % (node_name)
        super(MachineNotCreatedError, self).__init__(
            value=value, provisioner=provisioner)


class MachineNotFoundError(CloudMetalError):
    """
    Raised when the recorded server id is unknown to the compute driver.
    """

    def __init__(self, node_name, server_id, provisioner=None):
        # type: (str, str, Optional[object]) -> None
        self.node_name = node_name
        self.server_id = server_id
        value = ('Server %s for node %s no longer exists'
                 % (server_id, node_name))
        super(MachineNotFoundError, self).__init__(
            value=value, provisioner=provisioner)


class TransportError(CloudMetalError):
    pass


class ExecutionError(CloudMetalError):
    """
    Raised when a remote command exits with a non-zero status.
    """

    def __init__(self, result, provisioner=None):
        self.result = result
        value = ('Command "%s" exited with status %s: %s'
                 % (result.command, result.exit_status,
                    (result.stderr or result.stdout or '').strip()[:200]))
        super(ExecutionError, self).__init__(value=value,
                                             provisioner=provisioner)
