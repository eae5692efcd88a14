#!/usr/bin/env python3


# part of the Shellish software package
# Copyright 2025 by the Shellish authors
# All rights reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included
# in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
# DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
# TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE
# OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

import os
import sys

shellish_root = os.environ.get("SHELLISH_ROOT")
if shellish_root:
    sys.path.insert(0, shellish_root)

import shellish


cli = shellish.Shellish(
    "exec",
    "Execute nice files",
    version="1.0.0",
    author="Your Name",
    )

argument = cli.argument


@argument("file", "f", "Path to the file to execute", args=1, required=True)
async def file(values, context):
    file_path, = values
    print(f"Executing file: {file_path}")
    print(f"Would execute: {file_path}")

@argument("verbose", description="Enable verbose output")
def verbose(values, context):
    print("Verbose mode enabled")

@argument("output", "o", "Output file for results", args=1)
def output(values, context):
    output_path, = values
    print(f"Output will be written to: {output_path}")


if __name__ == "__main__":
    cli.main()
