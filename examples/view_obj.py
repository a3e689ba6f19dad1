import argparse
import pathlib

import numpy as np
import trimesh

from triobj import OBJError, load_obj


def main() -> None:
    """Visualize the draw stream of an OBJ file using trimesh."""
    parser = argparse.ArgumentParser(description="View the draw stream of a triangulated OBJ file.")
    parser.add_argument("input", type=pathlib.Path, help="Path to the OBJ file to view.")
    parser.add_argument("--max-vertices", type=int, default=1_000_000, help="Maximum number of 'v' records.")
    parser.add_argument("--max-normals", type=int, default=1_000_000, help="Maximum number of 'vn' records.")
    parser.add_argument("--max-indices", type=int, default=3_000_000, help="Maximum number of face corners.")

    args = parser.parse_args()
    if not args.input.exists():
        print(f"Error: File '{args.input}' does not exist.")
        return

    print(f"Loading {args.input.name}...")
    try:
        stream = load_obj(args.input, args.max_vertices, args.max_normals, args.max_indices)
    except OBJError as e:
        print(f"Error loading OBJ file: {e}")
        return

    # The stream is unindexed, so face i is simply draw indices 3i, 3i+1, 3i+2.
    faces = np.arange(stream.num_vertices, dtype=np.int64).reshape(-1, 3)
    t_mesh = trimesh.Trimesh(
        vertices=stream.positions,
        faces=faces,
        vertex_normals=stream.normals,
        visual=trimesh.visual.TextureVisuals(uv=stream.texture_coords),
        process=False,
    )

    print(f"Showing {stream.num_faces} triangles.")
    t_mesh.show(caption=args.input.name)


if __name__ == "__main__":
    main()
