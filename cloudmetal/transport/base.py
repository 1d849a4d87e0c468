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
Base classes for the ways cloudmetal talks to a provisioned machine.
"""

from typing import Optional
from typing import Union

from cloudmetal.types import ExecutionError

__all__ = [
    'ExecutionResult',
    'Transport'
]


class ExecutionResult(object):
    """
    Outcome of a command executed through a :class:`Transport`.
    """

    def __init__(self, command, stdout, stderr, exit_status):
        # type: (str, str, str, int) -> None
        self.command = command
        self.stdout = stdout
        self.stderr = stderr
        self.exit_status = exit_status

    @property
    def succeeded(self):
        # type: () -> bool
        return self.exit_status == 0

    def error_if_failed(self):
        # type: () -> ExecutionResult
        """
        Raise :class:`ExecutionError` unless the command exited with 0.

        :return: This result, so calls can be chained.
        """
        if not self.succeeded:
            raise ExecutionError(result=self)

        return self

    def __repr__(self):
        return ('<ExecutionResult command="%s", exit_status=%s>'
                % (self.command, self.exit_status))


class Transport(object):
    """
    Base class representing a connection to a machine.
    """

    def execute(self, command, timeout=None):
        # type: (str, Optional[float]) -> ExecutionResult
        """
        Run a command on the machine.

        :type command: ``str``
        :keyword command: Command to run.

        :param timeout: How long to wait (in seconds) for the command to
                        finish (optional).
        :type timeout: ``float``

        :rtype: :class:`ExecutionResult`
        """
        raise NotImplementedError(
            'execute not implemented for this transport')

    def read_file(self, path):
        # type: (str) -> Optional[bytes]
        """
        Read a file from the machine.

        :return: File content or ``None`` if the file does not exist.
        :rtype: ``bytes``
        """
        raise NotImplementedError(
            'read_file not implemented for this transport')

    def write_file(self, path, content):
        # type: (str, Union[str, bytes]) -> str
        """
        Write ``content`` to ``path`` on the machine, replacing it.

        :return: Path the file has been written to.
        :rtype: ``str``
        """
        raise NotImplementedError(
            'write_file not implemented for this transport')

    def available(self):
        # type: () -> bool
        """
        Return True if commands can currently be run on the machine.
        """
        raise NotImplementedError(
            'available not implemented for this transport')

    def disconnect(self):
        # type: () -> None
        raise NotImplementedError(
            'disconnect not implemented for this transport')
