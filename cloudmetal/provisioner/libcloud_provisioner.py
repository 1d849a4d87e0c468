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
Provisioner which manages machines through a libcloud compute driver.
"""

from typing import Any
from typing import Dict
from typing import List
from typing import Optional

import logging
from functools import partial

import requests
from libcloud.compute.base import Node
from libcloud.compute.base import NodeDriver
from libcloud.compute.providers import get_driver
from libcloud.compute.types import NodeState
from libcloud.compute.types import Provider

from cloudmetal.action import ActionHandler
from cloudmetal.convergence import convergence_strategy_for
from cloudmetal.machine import machine_class_for
from cloudmetal.node import get_node_name
from cloudmetal.node import get_provisioner_options
from cloudmetal.node import get_provisioner_output
from cloudmetal.node import get_server_id
from cloudmetal.node import is_windows
from cloudmetal.provisioner.base import Provisioner
from cloudmetal.transport import TransportType
from cloudmetal.transport import get_transport
from cloudmetal.types import CloudMetalError
from cloudmetal.types import MachineNotCreatedError
from cloudmetal.types import MachineNotFoundError
from cloudmetal.types import ProvisionerMismatchError
from cloudmetal.utils.misc import normalize_keys

__all__ = [
    'PROVISIONER_URL_SCHEME',
    'LibcloudProvisioner'
]

LOG = logging.getLogger('cloudmetal.provisioner.libcloud')

PROVISIONER_URL_SCHEME = 'fog'

# Compute options holding the credential which identifies the account a
# machine lives in, by lower-cased provider name. First one present wins.
CREDENTIAL_OPTIONS = {
    'aws': ('aws_access_key_id', 'key'),
    'ec2': ('key', 'aws_access_key_id'),
}
DEFAULT_CREDENTIAL_OPTIONS = ('key',)
UNKNOWN_CREDENTIAL = '???'

PROVIDER_ALIASES = {
    'aws': Provider.EC2,
}

DRIVER_ARGUMENT_ALIASES = {
    'aws_access_key_id': 'key',
    'aws_secret_access_key': 'secret',
}

BOOTSTRAP_OPTION_ALIASES = {
    'image_id': 'image',
    'flavor_id': 'size',
    'size_id': 'size',
    'location_id': 'location',
}

DEFAULT_SSH_USERNAME = 'root'
DEFAULT_SSH_INTERFACE = 'public_ips'
SUDO_PREFIX = 'sudo '


class LibcloudProvisioner(Provisioner):
    """
    Provisions machines with a libcloud compute driver.

    The node record is read as follows:

    - ``provisioner_options.bootstrap_options``: keyword arguments for
      ``create_node``. ``image``, ``size`` and ``location`` may be given as
      ids and are resolved through the driver.
    - ``provisioner_options.is_windows``: selects the Windows machine handle
      and convergence strategy.
    - ``provisioner_options.ssh_username``, ``ssh_private_key``,
      ``ssh_key_files``, ``ssh_password``, ``ssh_port``, ``ssh_interface``:
      how to reach the machine.
    - ``provisioner_options.convergence_options``: handed to the convergence
      strategy.

    and ``provisioner_output`` is populated with ``provisioner_url`` and
    ``server_id``.
    """

    def __init__(self,
                 compute_options,  # type: Dict[str, Any]
                 driver=None,  # type: Optional[NodeDriver]
                 session=None
                 ):
        """
        :param compute_options: Connection options for the compute driver.
                                ``provider`` names the libcloud provider, the
                                remaining options are passed to the driver
                                constructor.
        :type compute_options: ``dict``

        :param driver: Already instantiated driver to use instead of building
                       one from ``compute_options``.
        :type driver: :class:`libcloud.compute.base.NodeDriver`

        :param session: HTTP session shared by all the convergence strategies
                        of this provisioner.
        :type session: :class:`requests.Session`
        """
        self.compute_options = dict(compute_options)
        self.session = session or requests.Session()
        self._compute = driver

    @property
    def compute(self):
        # type: () -> NodeDriver
        if self._compute is None:
            self._compute = self._get_compute_driver()

        return self._compute

    @property
    def provisioner_url(self):
        # type: () -> str
        """
        ``fog:<provider>:<credential>``, identifies the provider and account
        machines are created in.
        """
        provider = self.compute_options.get('provider')
        option_names = CREDENTIAL_OPTIONS.get(str(provider).lower(),
                                              DEFAULT_CREDENTIAL_OPTIONS)

        credential = UNKNOWN_CREDENTIAL
        for option_name in option_names:
            if self.compute_options.get(option_name):
                credential = self.compute_options[option_name]
                break

        return '%s:%s:%s' % (PROVISIONER_URL_SCHEME, provider, credential)

    def acquire_machine(self, node, action_handler=None):
        action_handler = action_handler or ActionHandler()
        provisioner_url = self.provisioner_url
        name = get_node_name(node)

        provisioner_output = get_provisioner_output(node) or {
            'provisioner_url': provisioner_url
        }

        if provisioner_output.get('provisioner_url') != provisioner_url:
            raise ProvisionerMismatchError(
                node_name=name, expected=provisioner_url,
                actual=provisioner_output.get('provisioner_url'),
                provisioner=self)

        node['provisioner_output'] = provisioner_output

        if provisioner_output.get('server_id'):
            server = self.server_for(node)

            if server.state != NodeState.RUNNING:
                description = ('start machine %s (%s on %s)'
                               % (name, server.id, provisioner_url))
                action_handler.perform_action(
                    description, partial(self.compute.start_node, server))
                server = self._wait_until_running(node, server)

            return self.machine_for(node, server)

        options = get_provisioner_options(node)
        bootstrap_options = normalize_keys(options.get('bootstrap_options'))

        description = ['create machine %s on %s' % (name, provisioner_url)]
        for key, value in sorted(bootstrap_options.items()):
            description.append('  - %s: %r' % (key, value))

        server = action_handler.perform_action(
            description,
            partial(self._create_server, node, provisioner_output,
                    bootstrap_options))

        return self.machine_for(node, server)

    def connect_to_machine(self, node):
        return self.machine_for(node)

    def delete_machine(self, node, action_handler=None):
        action_handler = action_handler or ActionHandler()
        server = self.server_for(node)

        description = ('destroy machine %s (%s at %s)'
                       % (get_node_name(node), server.id,
                          self.provisioner_url))
        action_handler.perform_action(
            description, partial(self.compute.destroy_node, server))

        self.convergence_strategy_for(node).cleanup(action_handler, node)

    def server_for(self, node):
        # type: (Dict[str, Any]) -> Node
        """
        Return the libcloud node recorded for ``node``.
        """
        server_id = get_server_id(node)

        if not server_id:
            raise MachineNotCreatedError(node_name=get_node_name(node),
                                         provisioner=self)

        for server in self.compute.list_nodes():
            if server.id == server_id:
                return server

        raise MachineNotFoundError(node_name=get_node_name(node),
                                   server_id=server_id, provisioner=self)

    def machine_for(self, node, server=None):
        """
        Build the machine handle for ``node``.

        :rtype: :class:`cloudmetal.machine.Machine`
        """
        if server is None:
            server = self.server_for(node)

        cls = machine_class_for(is_windows(node))
        return cls(node, self.transport_for(node, server),
                   self.convergence_strategy_for(node))

    def convergence_strategy_for(self, node):
        options = get_provisioner_options(node)
        return convergence_strategy_for(
            is_windows(node),
            convergence_options=options.get('convergence_options'),
            session=self.session)

    def transport_for(self, node, server):
        """
        Build the transport used to reach ``server``.

        Only SSH is supported, Windows machines need an SSH server too. A
        server without an address (e.g. a stopped one) still gets a
        transport, connecting it fails instead.
        """
        options = get_provisioner_options(node)
        transport_type = options.get('transport', TransportType.SSH)

        ssh_interface = options.get('ssh_interface', DEFAULT_SSH_INTERFACE)
        addresses = getattr(server, ssh_interface, None) or []

        if not addresses:
            LOG.debug('Server has no address yet',
                      extra={'_server_id': server.id,
                             '_ssh_interface': ssh_interface})

        ssh_options = {
            'keys': self._get_ssh_keys(options, server),
            'keys_only': True,
            'port': options.get('ssh_port', 22),
        }

        password = options.get('ssh_password') or \
            server.extra.get('password')
        if password:
            ssh_options['password'] = password

        transport_options = {}
        if not is_windows(node):
            transport_options['prefix'] = SUDO_PREFIX

        return get_transport(
            transport_type,
            host=addresses[0] if addresses else None,
            username=options.get('ssh_username', DEFAULT_SSH_USERNAME),
            ssh_options=ssh_options,
            options=transport_options)

    def _get_ssh_keys(self, options, server):
        # type: (Dict[str, Any], Node) -> List[str]
        keys = []  # type: List[str]

        if options.get('ssh_private_key'):
            keys.append(options['ssh_private_key'])

        key_files = options.get('ssh_key_files') or []
        if isinstance(key_files, str):
            key_files = [key_files]
        keys.extend(key_files)

        if not keys and server.extra.get('private_key'):
            keys.append(server.extra['private_key'])

        return keys

    def _create_server(self, node, provisioner_output, bootstrap_options):
        create_args = self._get_create_node_args(node, bootstrap_options)
        server = self.compute.create_node(**create_args)

        # Recorded before waiting so a failed wait still leaves the id behind
        provisioner_output['server_id'] = server.id
        LOG.debug('Created server', extra={'_node': get_node_name(node),
                                           '_server_id': server.id})

        return self._wait_until_running(node, server)

    def _wait_until_running(self, node, server):
        # type: (Dict[str, Any], Node) -> Node
        options = get_provisioner_options(node)
        if not options.get('wait_until_running', True):
            return server

        kwargs = {'ssh_interface': options.get('ssh_interface',
                                               DEFAULT_SSH_INTERFACE)}
        if options.get('wait_timeout'):
            kwargs['timeout'] = options['wait_timeout']

        nodes = self.compute.wait_until_running([server], **kwargs)
        return nodes[0][0]

    def _get_create_node_args(self, node, bootstrap_options):
        # type: (Dict[str, Any], Dict[str, Any]) -> Dict[str, Any]
        args = {}
        for key, value in bootstrap_options.items():
            args[BOOTSTRAP_OPTION_ALIASES.get(key, key)] = value

        args.setdefault('name', get_node_name(node))

        if isinstance(args.get('image'), str):
            args['image'] = self._get_image(args['image'])

        if isinstance(args.get('size'), str):
            args['size'] = self._find(self.compute.list_sizes(),
                                      args['size'], 'size')

        if isinstance(args.get('location'), str):
            args['location'] = self._find(self.compute.list_locations(),
                                          args['location'], 'location')

        return args

    def _get_image(self, image_id):
        try:
            return self.compute.get_image(image_id)
        except NotImplementedError:
            return self._find(self.compute.list_images(), image_id, 'image')

    def _find(self, items, value, kind):
        for item in items:
            if item.id == value or item.name == value:
                return item

        raise CloudMetalError('Unknown %s: %s' % (kind, value),
                              provisioner=self)

    def _get_compute_driver(self):
        # type: () -> NodeDriver
        options = dict(self.compute_options)
        provider = options.pop('provider', None)

        if not provider:
            raise CloudMetalError('"provider" compute option is required',
                                  provisioner=self)

        provider = PROVIDER_ALIASES.get(provider.lower(), provider.lower())

        kwargs = {}
        for key, value in options.items():
            kwargs[DRIVER_ARGUMENT_ALIASES.get(key, key)] = value

        key = kwargs.pop('key', None)

        LOG.debug('Instantiating compute driver',
                  extra={'_provider': provider})

        cls = get_driver(provider)
        return cls(key, **kwargs)

    def __repr__(self):
        return '<LibcloudProvisioner url=%s>' % (self.provisioner_url)
