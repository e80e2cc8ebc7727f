#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker
Трекер привычек: отметки и счётчики по дням, серии, тепловая карта
"""

__version__ = "1.0.0"
