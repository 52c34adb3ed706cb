"""
chuk-mcp-hillshade: Relief Shading (Hillshade) Rendering MCP Server

Shades normalised terrain height fields with a directional light model
(central-difference normals, ambient + diffuse + cubic specular reflectance)
using either a batch raster pass or a per-frame renderer, and stores the
rendered greyscale images in chuk-artifacts.
"""
