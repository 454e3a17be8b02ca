def greet(name):   
    message = "hello   "   
    return message + name	
