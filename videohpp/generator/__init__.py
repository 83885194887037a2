"""Vulkan video registry reader and C++ header generator."""

from .hpp import render_cppm as render_cppm
from .hpp import render_hpp as render_hpp
from .parser import *
from .registry import EntityTables as EntityTables
from .registry import TypeRegistry as TypeRegistry
from .resolver import resolve as resolve
from .types import *
