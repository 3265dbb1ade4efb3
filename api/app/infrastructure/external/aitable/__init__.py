"""
Cliente de AITable: origen one-way del sync de usuarios.

La tabla es la fuente de verdad de los datos personales; este servicio solo
la lee y le escribe de vuelta el uid asignado por Firebase.
"""
