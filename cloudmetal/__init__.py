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
cloudmetal provisions machines through libcloud and bootstraps
configuration management agents onto them over SSH.

:var __version__: Current version of cloudmetal
"""

import logging
import os
import codecs
import atexit

try:
    import paramiko  # NOQA
    have_paramiko = True
except ImportError:
    have_paramiko = False

__all__ = [
    '__version__',
    'enable_debug'
]

__version__ = '0.1.0'

DEBUG_ENV_VARIABLE = 'CLOUDMETAL_DEBUG'


def enable_debug(fo):
    """
    Enable library wide debugging to a file-like object.

    :param fo: Where to append debugging information
    :type fo: File like object, only write operations are used.
    """
    from cloudmetal.utils.logging import ExtraLogFormatter

    handler = logging.StreamHandler(fo)
    handler.setFormatter(ExtraLogFormatter())

    logger = logging.getLogger('cloudmetal')
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    if have_paramiko:
        paramiko_logger = logging.getLogger('paramiko')
        paramiko_logger.addHandler(handler)
        paramiko_logger.setLevel(logging.DEBUG)

    # Ensure the file handle is closed on exit
    def close_file(fd):
        try:
            fd.close()
        except Exception:
            pass

    atexit.register(close_file, fo)
    return handler


def _init_once():
    """
    Utility function that is ran once on library import.

    This checks for the CLOUDMETAL_DEBUG environment variable, which if it
    exists is where we will log debug information about provisioning and the
    SSH transport.
    """
    path = os.getenv(DEBUG_ENV_VARIABLE)
    if path:
        mode = 'a'

        # Opening those files in append mode will throw "illegal seek"
        # exception there.
        if path in ['/dev/stderr', '/dev/stdout']:
            mode = 'w'

        fo = codecs.open(path, mode, encoding='utf8')
        return enable_debug(fo)

    return None


_init_once()
