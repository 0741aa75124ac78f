from typing import List, Tuple

import numpy as np

from pathtracer.camera import Camera
from pathtracer.materials.diffuse import Diffuse
from pathtracer.materials.emissive import Emissive
from pathtracer.materials.material import Material
from pathtracer.materials.refractive import Refractive
from pathtracer.materials.specular import Specular
from pathtracer.scene import Scene
from pathtracer.scene_settings import SceneSettings
from pathtracer.surfaces.cube import Cube
from pathtracer.surfaces.infinite_plane import Plane
from pathtracer.surfaces.shape import Shape
from pathtracer.surfaces.sphere import Sphere

# tag -> number of parameters after it
_PARAMETER_COUNTS = {
    "cam": 11,
    "set": 5,
    "spc": 3,
    "ref": 4,
    "dif": 3,
    "emt": 3,
    "sph": 5,
    "pln": 7,
    "box": 5,
}


def parse_scene_file(file_path: str) -> Tuple[Camera, SceneSettings, Scene]:
    with open(file_path, 'r') as f:
        return parse_scene(f.read().splitlines())


def parse_scene(lines: List[str]) -> Tuple[Camera, SceneSettings, Scene]:
    """Builds camera, settings and scene. Surfaces refer to materials by 1-based index in file order."""
    camera: Camera | None = None
    scene_settings: SceneSettings | None = None
    materials: List[Material] = []
    surfaces: List[Tuple[Shape, int]] = []

    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        obj_type = parts[0]
        if obj_type not in _PARAMETER_COUNTS:
            raise ValueError("Unknown object type: {} (line {})".format(obj_type, line_number))
        params = [float(p) for p in parts[1:]]
        if len(params) != _PARAMETER_COUNTS[obj_type]:
            raise ValueError(
                "'{}' expects {} parameters, got {} (line {})".format(
                    obj_type, _PARAMETER_COUNTS[obj_type], len(params), line_number
                )
            )

        if obj_type == "cam":
            camera = Camera(
                np.asarray(params[:3], dtype=float),
                np.asarray(params[3:6], dtype=float),
                np.asarray(params[6:9], dtype=float),
                params[9],
                params[10],
            )
        elif obj_type == "set":
            scene_settings = SceneSettings(np.asarray(params[:3], dtype=float), params[3], params[4])
        elif obj_type == "spc":
            materials.append(Specular(np.asarray(params[:3], dtype=float)))
        elif obj_type == "ref":
            materials.append(Refractive(np.asarray(params[:3], dtype=float), params[3]))
        elif obj_type == "dif":
            materials.append(Diffuse(np.asarray(params[:3], dtype=float)))
        elif obj_type == "emt":
            materials.append(Emissive(np.asarray(params[:3], dtype=float)))
        elif obj_type == "sph":
            surfaces.append((Sphere(np.asarray(params[:3], dtype=float), params[3]), int(params[4])))
        elif obj_type == "pln":
            plane = Plane(np.asarray(params[:3], dtype=float), np.asarray(params[3:6], dtype=float))
            surfaces.append((plane, int(params[6])))
        elif obj_type == "box":
            surfaces.append((Cube(np.asarray(params[:3], dtype=float), params[3]), int(params[4])))

    if camera is None:
        raise ValueError("Scene file is missing a camera ('cam' line)")
    if scene_settings is None:
        raise ValueError("Scene file is missing scene settings ('set' line)")

    scene = Scene()
    for shape, material_index in surfaces:
        if not (1 <= material_index <= len(materials)):
            raise ValueError(
                "Material index {} out of range (1..{})".format(material_index, len(materials))
            )
        material = materials[material_index - 1]
        scene.add(shape, material, light=isinstance(material, Emissive))
    return camera, scene_settings, scene
