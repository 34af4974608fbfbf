"""Feed models, the JSON Feed parser, date parsing and XML helpers."""