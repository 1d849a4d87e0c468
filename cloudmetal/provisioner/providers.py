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
Provisioner related utilities
"""

from typing import Dict
from typing import Tuple

__all__ = [
    'PROVISIONERS',
    'get_provisioner',
    'get_provisioner_for_url',
    'set_provisioner'
]

PROVISIONERS = {
    'fog': ('cloudmetal.provisioner.libcloud_provisioner',
            'LibcloudProvisioner'),
}  # type: Dict[str, Tuple[str, str]]


def get_provisioner(scheme):
    """
    Get a provisioner class.

    :param scheme: Scheme of the provisioner URLs it records, e.g. ``fog``.
    :type scheme: ``str``
    """
    if scheme not in PROVISIONERS:
        raise AttributeError('Provisioner %s does not exist' % (scheme))

    mod_name, class_name = PROVISIONERS[scheme]
    _mod = __import__(mod_name, globals(), locals(), [class_name])
    return getattr(_mod, class_name)


def get_provisioner_for_url(provisioner_url):
    """
    Get the provisioner class which records ``provisioner_url``, e.g.
    ``fog:AWS:AKIA...``.
    """
    scheme = provisioner_url.split(':', 1)[0]
    return get_provisioner(scheme)


def set_provisioner(scheme, module, klass):
    """
    Register a provisioner class for ``scheme``.
    """
    if scheme in PROVISIONERS:
        raise AttributeError('Provisioner %s already registered' % (scheme))

    PROVISIONERS[scheme] = (module, klass)

    # Check if this provisioner is valid
    try:
        get_provisioner(scheme)
    except (ImportError, AttributeError):
        PROVISIONERS.pop(scheme)
        raise
