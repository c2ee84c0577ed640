"""Recursive Whitted-style ray tracer.

This package renders scenes of spheres and quads lit by point lights, with
ambient, diffuse (Lambertian with hard shadows), mirror specular and
refraction terms. Reflection and refraction recurse up to a fixed depth.

Subpackages:
    core: Vectors, colors, rays, images and the rendering engine
    geometry: Primitive shapes and the primitive registry
    surfaces: Surface shading model and color sources (textures)
    camera: Pinhole camera mapping pixels to primary rays
    scene: World container, lights, nearest-hit search, scene files
    preview: PNG export, Matplotlib display and Taichi GGUI preview
"""

__version__ = "0.1.0"
