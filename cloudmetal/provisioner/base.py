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
Provisioners create, find and destroy the machines behind node records.
"""

__all__ = [
    'Provisioner'
]


class Provisioner(object):
    """
    Base class for provisioners.

    All the operations take the node record (a ``dict``) the caller owns.
    ``acquire_machine`` may change it, in which case the caller is
    responsible for saving it.
    """

    def acquire_machine(self, node, action_handler=None):
        """
        Acquire a machine for ``node``, generally by provisioning it.

        :param node: Node record.
        :type node: ``dict``

        :param action_handler: Receives the actions taken.
        :type action_handler: :class:`cloudmetal.action.ActionHandler`

        :return: Machine handle pointing at the machine.
        :rtype: :class:`cloudmetal.machine.Machine`
        """
        raise NotImplementedError(
            'acquire_machine not implemented for this provisioner')

    def connect_to_machine(self, node):
        """
        Return a machine handle for an already acquired machine, without
        changing it.

        :rtype: :class:`cloudmetal.machine.Machine`
        """
        raise NotImplementedError(
            'connect_to_machine not implemented for this provisioner')

    def delete_machine(self, node, action_handler=None):
        """
        Destroy the machine behind ``node`` and clean up after it.
        """
        raise NotImplementedError(
            'delete_machine not implemented for this provisioner')
