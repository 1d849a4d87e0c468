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
Machine handles tie a node to the transport and convergence strategy used to
manage it.
"""

from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

import logging

from cloudmetal.node import get_node_name
from cloudmetal.transport.base import ExecutionResult

__all__ = [
    'Machine'
]

LOG = logging.getLogger('cloudmetal.machine')


class Machine(object):
    """
    Base class for machine handles.

    Methods taking an ``action_handler`` change the machine and report the
    change through it; the others only look.
    """

    def __init__(self, node, transport, convergence_strategy):
        # type: (Dict[str, Any], Any, Any) -> None
        """
        :param node: Node record this machine belongs to.
        :type node: ``dict``

        :param transport: Connection to the machine.
        :type transport: :class:`cloudmetal.transport.Transport`

        :param convergence_strategy: Installs and runs the agent.
        :type convergence_strategy:
            :class:`cloudmetal.convergence.ConvergenceStrategy`
        """
        self.node = node
        self.transport = transport
        self.convergence_strategy = convergence_strategy

    @property
    def name(self):
        # type: () -> str
        return get_node_name(self.node)

    def setup_convergence(self, action_handler):
        return self.convergence_strategy.setup_convergence(action_handler,
                                                           self)

    def converge(self, action_handler):
        return self.convergence_strategy.converge(action_handler, self)

    def execute(self, action_handler, command, timeout=None):
        # type: (Any, str, Optional[float]) -> ExecutionResult
        """
        Run ``command`` as an action and raise if it fails.

        :rtype: :class:`cloudmetal.transport.ExecutionResult`
        """
        description = 'run \'%s\' on %s' % (command, self.name)

        def run():
            result = self.transport.execute(command, timeout=timeout)
            return result.error_if_failed()

        return action_handler.perform_action(description, run)

    def execute_always(self, command, timeout=None):
        # type: (str, Optional[float]) -> ExecutionResult
        """
        Run ``command`` without reporting it and without checking its exit
        status. Used for probes which do not change the machine.
        """
        return self.transport.execute(command, timeout=timeout)

    def read_file(self, path):
        # type: (str) -> Optional[bytes]
        return self.transport.read_file(path)

    def write_file(self, action_handler, path, content):
        # type: (Any, str, Union[str, bytes]) -> bool
        """
        Write ``content`` to ``path`` unless the file already holds it.

        :return: True if the file has been written.
        :rtype: ``bool``
        """
        if isinstance(content, str):
            content = content.encode('utf-8')

        if self.read_file(path) == content:
            LOG.debug('File is up to date',
                      extra={'_machine': self.name, '_path': path})
            return False

        description = 'write file %s on %s' % (path, self.name)
        action_handler.perform_action(
            description, lambda: self.transport.write_file(path, content))
        return True

    def delete_file(self, action_handler, path):
        # type: (Any, str) -> bool
        if not self.file_exists(path):
            return False

        description = 'delete file %s on %s' % (path, self.name)
        action_handler.perform_action(
            description,
            lambda: self.execute_always(
                self.delete_file_command(path)).error_if_failed())
        return True

    def create_dir(self, action_handler, path):
        # type: (Any, str) -> bool
        if self.is_directory(path):
            return False

        description = 'create directory %s on %s' % (path, self.name)
        action_handler.perform_action(
            description,
            lambda: self.execute_always(
                self.create_dir_command(path)).error_if_failed())
        return True

    def file_exists(self, path):
        # type: (str) -> bool
        return self.execute_always(self.file_exists_command(path)).succeeded

    def is_directory(self, path):
        # type: (str) -> bool
        return self.execute_always(self.is_directory_command(path)).succeeded

    def disconnect(self):
        self.transport.disconnect()

    def quote(self, value):
        # type: (str) -> str
        raise NotImplementedError(
            'quote not implemented for this machine')

    def file_exists_command(self, path):
        # type: (str) -> str
        raise NotImplementedError(
            'file_exists_command not implemented for this machine')

    def is_directory_command(self, path):
        # type: (str) -> str
        raise NotImplementedError(
            'is_directory_command not implemented for this machine')

    def delete_file_command(self, path):
        # type: (str) -> str
        raise NotImplementedError(
            'delete_file_command not implemented for this machine')

    def create_dir_command(self, path):
        # type: (str) -> str
        raise NotImplementedError(
            'create_dir_command not implemented for this machine')

    def __repr__(self):
        return ('<%s name=%s, transport=%r, convergence_strategy=%r>'
                % (self.__class__.__name__, self.name, self.transport,
                   self.convergence_strategy))
