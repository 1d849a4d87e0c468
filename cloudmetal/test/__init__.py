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

import unittest

from mock import Mock

from libcloud.compute.base import Node
from libcloud.compute.base import NodeDriver
from libcloud.compute.types import NodeState

from cloudmetal.transport.base import ExecutionResult
from cloudmetal.transport.base import Transport


class CloudMetalTestCase(unittest.TestCase):

    def get_mock_driver(self, nodes=None):
        """
        Return a mock compute driver which knows about ``nodes``.

        ``wait_until_running`` returns the nodes it is given, the way the
        real method does once they are up.
        """
        driver = Mock(spec=NodeDriver)
        driver.name = 'Mock'
        driver.type = 'mock'
        driver.list_nodes.return_value = list(nodes or [])
        driver.wait_until_running.side_effect = \
            lambda nodes, **kwargs: [(n, n.public_ips) for n in nodes]
        return driver

    def assertNoComputeCalls(self, driver, *names):
        for name in names:
            method = getattr(driver, name)
            self.assertEqual(method.call_count, 0,
                             '%s was called %d times'
                             % (name, method.call_count))


def make_server(server_id='i-12345', state=NodeState.RUNNING,
                public_ips=None, private_ips=None, extra=None):
    if public_ips is None:
        public_ips = ['1.2.3.4']

    if private_ips is None:
        private_ips = ['10.0.0.4']

    return Node(id=server_id, name='server-%s' % (server_id), state=state,
                public_ips=public_ips, private_ips=private_ips,
                driver=Mock(type='mock'), extra=extra)


class MockTransport(Transport):
    """
    Transport which records commands and keeps files in memory.

    ``exit_statuses`` maps a part of a command to the exit status
    it returns, anything else succeeds.
    """

    def __init__(self, files=None, exit_statuses=None):
        self.files = dict(files or {})
        self.exit_statuses = dict(exit_statuses or {})
        self.commands = []
        self.writes = []
        self.disconnected = False

    def execute(self, command, timeout=None):
        self.commands.append(command)

        status = 0
        for part, value in self.exit_statuses.items():
            if part in command:
                status = value
                break

        return ExecutionResult(command=command, stdout='out', stderr='err',
                               exit_status=status)

    def read_file(self, path):
        return self.files.get(path)

    def write_file(self, path, content):
        if isinstance(content, str):
            content = content.encode('utf-8')

        self.writes.append(path)
        self.files[path] = content
        return path

    def available(self):
        return True

    def disconnect(self):
        self.disconnected = True
