"""Operations modules — everything that sits around the graph algebra.

Each module contains pure functions over OpenGraph values (export, skeleton
seeding) or the file formats that persist them (project_io).
"""
