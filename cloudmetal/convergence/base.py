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
Convergence strategies install a configuration management agent on a
machine, run it and clean up after the machine is gone.
"""

from typing import Any
from typing import Dict
from typing import Optional

import logging
from functools import partial

import requests

from cloudmetal.node import get_node_name

__all__ = [
    'ConvergenceStrategy',
    'AgentConvergenceStrategy'
]

LOG = logging.getLogger('cloudmetal.convergence')


class ConvergenceStrategy(object):
    """
    Base class for convergence strategies.
    """

    def __init__(self, convergence_options=None, session=None):
        # type: (Optional[Dict[str, Any]], Optional[requests.Session]) -> None
        """
        :type convergence_options: ``dict``
        :keyword convergence_options: Strategy specific options.

        :type session: :class:`requests.Session`
        :keyword session: Session used for HTTP calls. Callers configure
                          authentication for the configuration server on it.
                          Without one, every request uses a short lived
                          session.
        """
        self.options = convergence_options or {}
        self.session = session

    def setup_convergence(self, action_handler, machine):
        """
        Install and configure the agent on ``machine``.
        """
        raise NotImplementedError(
            'setup_convergence not implemented for this strategy')

    def converge(self, action_handler, machine):
        """
        Run the agent on ``machine``.
        """
        raise NotImplementedError(
            'converge not implemented for this strategy')

    def cleanup(self, action_handler, node):
        """
        Remove what the agent registered for ``node`` once its machine has
        been destroyed.

        Without a ``server_url`` option there is nothing registered anywhere
        and this is a no-op.
        """
        server_url = self.options.get('server_url')
        name = get_node_name(node)

        if not server_url:
            LOG.debug('No configuration server, nothing to clean up',
                      extra={'_node': name})
            return []

        deleted = []
        for kind in ('node', 'client'):
            url = '%s/%ss/%s' % (server_url.rstrip('/'), kind, name)
            description = 'delete %s %s at %s' % (kind, name, server_url)
            if action_handler.perform_action(description,
                                             partial(self._delete, url)):
                deleted.append(kind)

        return deleted

    def _delete(self, url):
        # type: (str) -> bool
        response = self._request('DELETE', url)

        if response.status_code == requests.codes.not_found:
            LOG.debug('Already deleted', extra={'_url': url})
            return False

        response.raise_for_status()
        return True

    def _request(self, method, url):
        # type: (str, str) -> requests.Response
        timeout = self.options.get('http_timeout')

        if self.session is not None:
            return self.session.request(method, url, timeout=timeout)

        with requests.Session() as session:
            return session.request(method, url, timeout=timeout)

    def __repr__(self):
        return '<%s server_url=%s>' % (self.__class__.__name__,
                                       self.options.get('server_url'))


class AgentConvergenceStrategy(ConvergenceStrategy):
    """
    Shared logic of strategies which install the agent from a package and
    then run it as a command.

    Subclasses define where the configuration file lives, how the agent is
    detected and how it is installed.
    """

    config_dir = None  # type: str
    config_path = None  # type: str
    default_agent_command = 'chef-client'

    @property
    def agent_command(self):
        # type: () -> str
        return self.options.get('agent_command', self.default_agent_command)

    def setup_convergence(self, action_handler, machine):
        if self.agent_installed(machine):
            LOG.debug('Agent already installed',
                      extra={'_machine': machine.name})
        else:
            self.install_agent(action_handler, machine)

        machine.create_dir(action_handler, self.config_dir)
        machine.write_file(action_handler, self.config_path,
                           self.client_config(machine))

    def converge(self, action_handler, machine):
        return machine.execute(action_handler, self.agent_command)

    def agent_installed(self, machine):
        # type: (Any) -> bool
        raise NotImplementedError(
            'agent_installed not implemented for this strategy')

    def install_agent(self, action_handler, machine):
        raise NotImplementedError(
            'install_agent not implemented for this strategy')

    def client_config(self, machine):
        # type: (Any) -> str
        """
        Render the agent configuration file for ``machine``.
        """
        lines = ["node_name '%s'" % (machine.name)]

        server_url = self.options.get('server_url')
        if server_url:
            lines.append("chef_server_url '%s'" % (server_url))

        extra_config = self.options.get('client_config') or {}
        for key, value in sorted(extra_config.items()):
            lines.append('%s %s' % (key, self._format_config_value(value)))

        return '\n'.join(lines) + '\n'

    def _format_config_value(self, value):
        if isinstance(value, bool):
            return 'true' if value else 'false'

        if isinstance(value, str):
            return "'%s'" % (value.replace("'", "\\'"))

        return str(value)
