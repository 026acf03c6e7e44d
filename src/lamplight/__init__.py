"""Lamplight: a direct-lighting ray tracer with a Taichi parallel backend.

This package renders still images of spheres and one-sided planes lit by
directional and spherical lights, with:
- Lambertian diffuse shading
- Hard shadows from one shadow ray per light
- A pure-Python reference renderer and a Taichi kernel renderer that agree

Subpackages:
    core: Vector/point algebra, rays, shading and the render drivers
    camera: Primary-ray generation from the scene's field of view
    geometry: Sphere and plane intersection routines
    scene: Scene data model, nearest-hit queries and scene construction
    preview: Image export and matplotlib preview
"""

__version__ = "0.1.0"
