"""
API de posts de Linkr: publicar links con descripción y trends (#hashtags),
editar/borrar/compartir, y listar el feed con el preview de cada link.
"""
