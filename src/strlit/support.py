# Copyright 2017 Google Inc. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Host objects for the strlit tool, and test cases that drive the tool.

`Host` talks to the real filesystem and stdio; `FakeHost` keeps
everything in memory so that `tool.main()` can be tested in-process.
"""

import io
import os
import shutil
import subprocess
import sys
import tempfile
from typing import Callable, Optional
import unittest


_SRC_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Host:
    def __init__(self):
        self.stdin = sys.stdin
        self.stdout = sys.stdout
        self.stderr = sys.stderr

    def chdir(self, *comps):
        return os.chdir(self.join(*comps))

    def getcwd(self):
        return os.getcwd()

    def join(self, *comps):
        return os.path.join(*comps)

    def mkdtemp(self):
        return tempfile.mkdtemp()

    def print(self, *args, end='\n', file=None, flush=True):
        file = file or self.stdout
        print(*args, end=end, file=file, flush=flush)

    def rmtree(self, path):
        shutil.rmtree(path)

    def read_text_file(self, path):
        with open(path, encoding='utf-8') as f:
            return f.read()

    def write_text_file(self, path, contents):
        with open(path, 'w', encoding='utf-8') as f:
            f.write(contents)


class FakeHost:
    def __init__(self):
        self.stderr = io.StringIO()
        self.stdin = io.StringIO()
        self.stdout = io.StringIO()
        self.files = {}
        self.dirs = set()
        self.current_tmpno = 0
        self.cwd = '/tmp'

    def abspath(self, *comps):
        relpath = self.join(*comps)
        if relpath.startswith('/'):
            return relpath
        return self.join(self.cwd, relpath)

    def chdir(self, *comps):
        path = self.join(*comps)
        if not path.startswith('/'):
            path = self.join(self.cwd, path)
        self.cwd = path

    def getcwd(self):
        return self.cwd

    def join(self, *comps):
        p = ''
        for c in comps:
            if c in ('', '.'):
                continue
            if c.startswith('/'):
                p = c
            elif p:
                p += '/' + c
            else:
                p = c
        return p.replace('/./', '/')

    def mkdtemp(self):
        curno = self.current_tmpno
        self.current_tmpno += 1
        path = f'/__im_tmp/tmp_{curno}'
        self.dirs.add(path)
        return path

    def print(self, *args, end='\n', file=None):
        file = file or self.stdout
        print(*args, end=end, file=file, flush=True)

    def rmtree(self, path):
        path = self.abspath(path)
        for f in list(self.files):
            if f.startswith(path + '/'):
                del self.files[f]
        self.dirs.discard(path)

    def read_text_file(self, path):
        try:
            return self.files[self.abspath(path)]
        except KeyError as exc:
            raise FileNotFoundError(path) from exc

    def write_text_file(self, path, contents):
        self.files[self.abspath(path)] = contents


class _BaseTestCase(unittest.TestCase):
    maxDiff: Optional[int] = None
    host_fn: Optional[Callable[[], Host | FakeHost]] = None

    def call(self, host, args, stdin):
        raise NotImplementedError

    # pylint: disable=too-many-positional-arguments
    def check(
        self, args, stdin=None, files=None, returncode=0, out=None, err=None
    ):
        self.assertIsNotNone(self.host_fn, 'self.host_fn is not defined')
        h = self.host_fn()  # pylint: disable=not-callable
        orig_wd = h.getcwd()
        tmpdir = None

        try:
            tmpdir = h.mkdtemp()
            h.chdir(tmpdir)
            if files:
                for path, contents in files.items():
                    h.write_text_file(path, contents)

            actual_ret, actual_out, actual_err = self.call(h, args, stdin)
            if returncode is not None:
                self.assertEqual(returncode, actual_ret)
            if out is not None:
                self.assertMultiLineEqual(out, actual_out)
            if err is not None:
                self.assertMultiLineEqual(err, actual_err)
            return actual_ret, actual_out, actual_err
        finally:
            if tmpdir:
                h.chdir(orig_wd)
                h.rmtree(tmpdir)

    # pylint: enable=too-many-positional-arguments


class InlineTestCase(_BaseTestCase):
    """Runs `main` in-process against a FakeHost."""

    host_fn = FakeHost
    main: Optional[Callable[[Optional[list[str]], Host | FakeHost], int]] = (
        None
    )

    def call(self, host, args, stdin):
        self.assertIsNotNone(self.__class__.main, '__class__.main is not set')
        if stdin:
            host.stdin.write(stdin)
            host.stdin.seek(0)

        try:
            # pylint: disable=not-callable
            actual_ret = self.__class__.main(args, host)
        except SystemExit as e:
            actual_ret = e.code

        return actual_ret, host.stdout.getvalue(), host.stderr.getvalue()


class HostTestCase(_BaseTestCase):
    """Runs the tool as a subprocess against the real filesystem."""

    host_fn = Host

    def exe_args(self):
        raise NotImplementedError

    def call(self, host, args, stdin):
        del host
        if 'integration' in os.environ.get('TYP_SKIP', ''):
            self.skipTest('skipping integration test by request')

        cmd = self.exe_args() + args
        env = os.environ.copy()
        env['PYTHONPATH'] = os.pathsep.join(
            p for p in (_SRC_DIR, env.get('PYTHONPATH')) if p
        )
        with subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding='utf-8',
            env=env,
        ) as proc:
            actual_out, actual_err = proc.communicate(input=stdin)
            actual_ret = proc.returncode
        return actual_ret, actual_out, actual_err


class ModuleTestCase(HostTestCase):
    module: Optional[str] = None

    def exe_args(self):
        self.assertIsNotNone(self.module, 'self.module is not set')
        return [sys.executable, '-m', self.module]


class ScriptTestCase(HostTestCase):
    script: Optional[str] = None

    def exe_args(self):
        self.assertIsNotNone(self.script, 'self.script is not set')
        if os.path.exists(self.script):
            return [sys.executable, self.script]
        script = shutil.which(self.script)
        if script is None:
            self.skipTest(f'`{self.script}` is not installed in PATH')
        return [script]
